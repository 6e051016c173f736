from django import forms

from content.models import Content


class ContentForm(forms.ModelForm):
    class Meta:
        model = Content
        fields = ["title", "slug", "body", "status"]
        widgets = {"body": forms.Textarea(attrs={"rows": 16})}

    def __init__(self, *args, content_type: str, **kwargs):
        super().__init__(*args, **kwargs)
        self.content_type = content_type
        self.instance.content_type = content_type

    def clean_slug(self):
        slug = self.cleaned_data["slug"]
        qs = Content.objects.filter(content_type=self.content_type, slug=slug)
        if self.instance.pk:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise forms.ValidationError("A record with this slug already exists.")
        return slug


class FileEditForm(forms.Form):
    contents = forms.CharField(widget=forms.Textarea(attrs={"rows": 24}), required=False, strip=False)

from __future__ import annotations

from typing import Iterable, Optional

from django import template

register = template.Library()


@register.inclusion_tag("backend/widgets/sidebar.html", takes_context=True)
def sidebar_widget(context, menu: Optional[Iterable[dict]] = None):
    """Sidebar sections with their submenus."""
    sections = menu if menu is not None else context.get("sidebar_menu") or []
    if callable(sections):
        sections = sections()
    return {"sections": list(sections), "request": context.get("request")}


@register.inclusion_tag("backend/widgets/record_list.html")
def record_list_widget(title: str, records: Iterable[dict], empty_label: str = "Nothing yet."):
    """Short list of records, each linking to its edit page."""
    return {"title": title, "records": list(records), "empty_label": empty_label}


@register.inclusion_tag("backend/widgets/navigator.html", takes_context=True)
def navigator_widget(context, breadcrumbs=None):
    """Breadcrumb path."""
    crumbs = breadcrumbs if breadcrumbs is not None else context.get("breadcrumbs")
    return {"breadcrumbs": crumbs}

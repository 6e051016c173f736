from __future__ import annotations

import logging
import platform
from pathlib import Path

import django
import rest_framework
import yaml
from django.conf import settings
from django.contrib import messages
from django.contrib.auth import get_user_model
from django.contrib.auth.decorators import login_required
from django.core.cache import cache
from django.core.paginator import Paginator
from django.http import Http404
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.utils import timezone
from django.utils.http import urlencode
from django.utils.translation import get_language

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from content.config import Config
from content.contenttypes import ContentTypeNotFound
from content.models import Content
from content.summary import ContentSummary

from .captions import CaptionTranslator
from .forms import ContentForm, FileEditForm
from .menu_builder import LATEST_RECORDS_LIMIT, get_menu_builder

logger = logging.getLogger(__name__)

EDITABLE_EXTS = {".yaml", ".yml", ".html", ".htm", ".css", ".js", ".json", ".md", ".txt"}
YAML_EXTS = {".yaml", ".yml"}


def _contenttype_or_404(config: Config, slug: str):
    try:
        return config.contenttype(slug)
    except ContentTypeNotFound:
        raise Http404("Unknown content type")


def _area_root(area: str) -> Path:
    areas = getattr(settings, "BACKOFFICE_FILE_AREAS", {})
    if area not in areas:
        raise Http404("Unknown file area")
    return Path(areas[area])


def _safe_join(root: Path, req_path: str) -> Path:
    candidate = (root / req_path.lstrip("/")).resolve()
    root_resolved = root.resolve()
    if root_resolved not in candidate.parents and candidate != root_resolved:
        raise Http404("Invalid path")
    return candidate


def _read_text(p: Path) -> str:
    return p.read_text(encoding="utf-8")


def _is_editable(p: Path) -> bool:
    return p.suffix.lower() in EDITABLE_EXTS


@login_required
def dashboard(request):
    config = Config()
    summary = ContentSummary(config)
    sections = [
        {
            "contenttype": ct,
            "records": [
                {"title": summary.get_title(r), "record": r, "edit_link": summary.get_edit_link(r)}
                for r in summary.find_latest(ct, LATEST_RECORDS_LIMIT)
            ],
        }
        for ct in config.contenttypes()
    ]
    return render(request, "backend/dashboard.html", {"title": "Dashboard", "sections": sections})


@login_required
def content_overview(request, content_type: str):
    config = Config()
    ct = _contenttype_or_404(config, content_type)

    per_page = (config.get("general", {}) or {}).get("records_per_page", 10)
    qs = Content.objects.filter(content_type=ct.slug).select_related("author")
    page = Paginator(qs, per_page).get_page(request.GET.get("page"))

    return render(
        request,
        "backend/content_overview.html",
        {"title": ct.name, "contenttype": ct, "page": page},
    )


@login_required
def content_new(request, content_type: str):
    config = Config()
    ct = _contenttype_or_404(config, content_type)

    if ct.singleton:
        existing = Content.objects.filter(content_type=ct.slug).first()
        if existing is not None:
            return redirect("backend:content_edit", pk=existing.pk)

    form = ContentForm(request.POST or None, content_type=ct.slug)
    if request.method == "POST" and form.is_valid():
        record = form.save(commit=False)
        record.author = request.user
        record.version = 1
        if record.status == Content.Status.PUBLISHED:
            record.published_at = timezone.now()
        record.save()
        logger.info("Created %s/%s", ct.slug, record.slug)
        messages.success(request, f"{ct.singular_name} created.")
        return redirect("backend:content_edit", pk=record.pk)

    return render(
        request,
        "backend/content_form.html",
        {"title": f"New {ct.singular_name}", "contenttype": ct, "form": form},
    )


@login_required
def content_edit(request, pk: int):
    config = Config()
    record = get_object_or_404(Content, pk=pk)
    ct = _contenttype_or_404(config, record.content_type)

    form = ContentForm(request.POST or None, instance=record, content_type=ct.slug)
    if request.method == "POST" and form.is_valid():
        record = form.save(commit=False)
        if "body" in form.changed_data:
            record.version += 1
        if record.status == Content.Status.PUBLISHED and record.published_at is None:
            record.published_at = timezone.now()
        record.save()
        messages.success(request, f"{ct.singular_name} saved.")
        return redirect("backend:content_edit", pk=record.pk)

    return render(
        request,
        "backend/content_form.html",
        {
            "title": ContentSummary(config).get_title(record),
            "contenttype": ct,
            "form": form,
            "record": record,
        },
    )


@login_required
def users(request):
    qs = get_user_model().objects.order_by("username")
    return render(request, "backend/users.html", {"title": "Users & Permissions", "users": qs})


@login_required
def filemanager(request, area: str):
    root = _area_root(area)
    req_path = request.GET.get("path", "")
    target = _safe_join(root, req_path)
    if target.is_dir():
        items = _list_dir(area, target, req_path)
    elif target == root.resolve():
        # area directory not created yet
        items = []
    else:
        raise Http404("Not a directory")

    return render(
        request,
        "backend/filemanager.html",
        {
            "title": f"Files: {area}",
            "area": area,
            "dir_path": "/" + req_path.strip("/"),
            "items": items,
            "breadcrumbs": _breadcrumbs_for_dir(area, req_path),
        },
    )


@login_required
def file_edit(request, area: str):
    root = _area_root(area)
    req_path = request.GET.get("file", "")
    target = _safe_join(root, req_path)
    if not target.is_file() or not _is_editable(target):
        raise Http404("Not an editable file")

    if request.method == "POST":
        form = FileEditForm(request.POST)
        if form.is_valid():
            contents = form.cleaned_data["contents"]
            error = _validate_contents(target, contents)
            if error:
                messages.error(request, error)
            else:
                target.write_text(contents, encoding="utf-8")
                logger.info("File %s saved by %s", target, request.user)
                messages.success(request, f"{target.name} saved.")
                return redirect(_file_edit_url(area, req_path))
    else:
        form = FileEditForm(initial={"contents": _read_text(target)})

    return render(
        request,
        "backend/file_edit.html",
        {
            "title": target.name,
            "area": area,
            "file": req_path,
            "form": form,
            "breadcrumbs": _breadcrumbs_for_file(area, req_path),
        },
    )


def _validate_contents(target: Path, contents: str) -> str:
    if target.suffix.lower() in YAML_EXTS:
        try:
            yaml.safe_load(contents)
        except yaml.YAMLError as exc:
            return f"Invalid YAML: {exc}"
    return ""


@login_required
def clear_cache(request):
    cache.clear()
    logger.info("Cache cleared by %s", request.user)
    messages.success(request, "The cache has been cleared.")
    return redirect("backend:dashboard")


@login_required
def translations(request):
    return render(
        request,
        "backend/translations.html",
        {
            "title": "Translations",
            "language": get_language(),
            "captions": CaptionTranslator().catalogue(),
        },
    )


@login_required
def kitchensink(request):
    return render(
        request,
        "backend/kitchensink.html",
        {
            "title": "The Kitchensink",
            "sample_records": [
                {"title": "Lorem ipsum dolor sit amet", "edit_link": "#"},
                {"title": "Consectetur adipiscing elit", "edit_link": "#"},
            ],
            "empty_records": [],
            "breadcrumbs": [("Dashboard", reverse("backend:dashboard")), ("The Kitchensink", "")],
        },
    )


@login_required
def about(request):
    return render(
        request,
        "backend/about.html",
        {
            "title": "About",
            "versions": [
                ("Python", platform.python_version()),
                ("Django", django.get_version()),
                ("Django REST framework", rest_framework.VERSION),
                ("PyYAML", yaml.__version__),
            ],
        },
    )


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def api_menu(request):
    return Response(get_menu_builder().get_menu())


def _file_edit_url(area: str, req_path: str) -> str:
    return reverse("backend:file_edit", kwargs={"area": area}) + "?" + urlencode({"file": req_path})


def _filemanager_url(area: str, req_path: str) -> str:
    url = reverse("backend:filemanager", kwargs={"area": area})
    return url + "?" + urlencode({"path": req_path}) if req_path else url


def _breadcrumbs_for_dir(area: str, req_path: str):
    parts = [p for p in req_path.split("/") if p]
    crumbs = [(area.title(), _filemanager_url(area, ""))]
    acc = ""
    for part in parts:
        acc += "/" + part
        crumbs.append((part, _filemanager_url(area, acc)))
    return crumbs


def _breadcrumbs_for_file(area: str, req_path: str):
    parts = [p for p in req_path.split("/") if p]
    crumbs = _breadcrumbs_for_dir(area, "/".join(parts[:-1]))
    crumbs.append((parts[-1], _file_edit_url(area, req_path)))
    return crumbs


def _list_dir(area: str, target: Path, req_path: str):
    ignore = set(getattr(settings, "BACKOFFICE_FILE_IGNORE", set()))
    dirs = []
    files = []
    prefix = "/" + req_path.strip("/") + "/" if req_path.strip("/") else "/"
    for p in sorted(target.iterdir(), key=lambda x: x.name.lower()):
        if p.name.startswith(".") or p.name in ignore:
            continue
        if p.is_dir():
            dirs.append(
                {
                    "kind": "dir",
                    "title": p.name,
                    "url": _filemanager_url(area, prefix + p.name),
                }
            )
        elif p.is_file():
            files.append(
                {
                    "kind": "file",
                    "title": p.name,
                    "size": p.stat().st_size,
                    "url": _file_edit_url(area, prefix + p.name) if _is_editable(p) else None,
                }
            )
    return dirs + files

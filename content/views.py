import hashlib
import logging
from collections.abc import Mapping

from django.db import transaction
from django.http import Http404
from django.shortcuts import render
from django.urls import reverse
from django.utils import timezone

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from .config import Config
from .contenttypes import ContentTypeNotFound
from .models import Content
from .summary import ContentSummary

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 10
MAX_LIST_LIMIT = 100


def _sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


@api_view(["GET"])
@permission_classes([AllowAny])
def api_entrypoint(request):
    config = Config()
    return Response(
        {
            "menu": request.build_absolute_uri(reverse("backend:api_menu")),
            "contents": {
                ct.slug: request.build_absolute_uri(reverse("content:contents", kwargs={"content_type": ct.slug}))
                for ct in config.contenttypes()
            },
        }
    )


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticated])
def contents(request, content_type):
    config = Config()
    try:
        ct = config.contenttype(content_type)
    except ContentTypeNotFound:
        return Response({"error": f"unknown content type: {content_type}"}, status=status.HTTP_404_NOT_FOUND)

    if request.method == "POST":
        return _upsert(request, ct)
    return _list_latest(request, ct, config)


def _list_latest(request, ct, config):
    try:
        limit = int(request.query_params.get("limit", DEFAULT_LIST_LIMIT))
    except ValueError:
        return Response({"error": "limit must be an integer"}, status=status.HTTP_400_BAD_REQUEST)
    limit = max(1, min(limit, MAX_LIST_LIMIT))

    summary = ContentSummary(config)
    records = summary.find_latest(ct, limit)
    return Response(
        [
            {
                "id": r.pk,
                "slug": r.slug,
                "name": summary.get_title(r),
                "status": r.status,
                "modified_at": r.modified_at,
                "link": summary.get_link(r),
                "editLink": summary.get_edit_link(r),
            }
            for r in records
        ]
    )


def _upsert(request, ct):
    p = request.data

    if not isinstance(p, Mapping):
        return Response({"error": "expected a JSON object"}, status=status.HTTP_400_BAD_REQUEST)

    if "slug" not in p:
        return Response({"error": "missing field: slug"}, status=status.HTTP_400_BAD_REQUEST)

    slug = str(p["slug"])
    body = str(p.get("body", "") or "")
    title = str(p.get("title", "") or "")
    content_hash = str(p.get("content_hash") or _sha256_hex(body))

    record_status = str(p.get("status") or Content.Status.DRAFT)
    if record_status not in Content.Status.values:
        return Response({"error": f"invalid status: {record_status}"}, status=status.HTTP_400_BAD_REQUEST)

    with transaction.atomic():
        if ct.singleton and Content.objects.filter(content_type=ct.slug).exclude(slug=slug).exists():
            return Response(
                {"error": f"{ct.name} is a singleton and already has a record"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        record, created = Content.objects.select_for_update().get_or_create(
            content_type=ct.slug,
            slug=slug,
            defaults=dict(
                title=title,
                body=body,
                status=record_status,
                content_hash=content_hash,
                author=request.user,
                version=1,
            ),
        )

        if not created:
            if (record.content_hash, record.title, record.status) == (content_hash, title, record_status):
                return Response({"status": "no_change", "id": record.pk, "version": record.version})

            # Metadata-only edits keep the version
            if record.content_hash != content_hash:
                record.body = body
                record.content_hash = content_hash
                record.version += 1
            record.title = title
            record.status = record_status
            record.save()

        if record.status == Content.Status.PUBLISHED and record.published_at is None:
            record.published_at = timezone.now()
            record.save(update_fields=["published_at"])

    logger.info("%s %s/%s (version %s)", "Created" if created else "Updated", ct.slug, slug, record.version)
    return Response(
        {"status": "created" if created else "updated", "id": record.pk, "version": record.version},
        status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
    )


def record(request, singular_slug: str, slug: str):
    config = Config()
    try:
        ct = config.contenttype(singular_slug)
    except ContentTypeNotFound:
        raise Http404("Unknown content type")

    try:
        r = Content.objects.get(content_type=ct.slug, slug=slug, status=Content.Status.PUBLISHED)
    except Content.DoesNotExist:
        raise Http404("Record not found")

    return render(
        request,
        "content/record.html",
        {"record": r, "contenttype": ct, "title": ContentSummary(config).get_title(r)},
    )

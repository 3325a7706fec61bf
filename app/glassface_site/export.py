from __future__ import annotations

import argparse
from dataclasses import dataclass, field, replace
import logging
from pathlib import Path
import shutil
import sys

from glassface_site.content.prerender import list_prerender_slugs
from glassface_site.content.resolver import ContentResolver
from glassface_site.core.config import AppConfig, normalize_base_path
from glassface_site.core.defaults import DEFAULT_EXPORT_BASE_PATH, DEFAULT_EXPORT_DIR
from glassface_site.infrastructure.image_urls import ImageUrlBuilder
from glassface_site.infrastructure.logging import setup_app_logging
from glassface_site.infrastructure.sanity_client import SanityClient
from glassface_site.infrastructure.snapshot import LocalSnapshot
from glassface_site.web.core.templating import STATIC_DIR, build_templates
from glassface_site.web.routers.common import RenderPlan, plan_home, plan_not_found, plan_slug

LOGGER = logging.getLogger(__name__)


@dataclass
class ExportResult:
    output_dir: Path
    written: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def _write_page(templates, plan: RenderPlan, target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    html = templates.get_template(plan.template_name).render(plan.context)
    target.write_text(html, encoding="utf-8")


def export_site(
    config: AppConfig,
    output_dir: str | Path,
    *,
    resolver: ContentResolver | None = None,
) -> ExportResult:
    """Render the home page, every pre-render slug and a 404 page to disk.

    Pages are written as ``<slug>/index.html`` so the output can be served
    with trailing-slash URLs from any static host.
    """
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    snapshot = LocalSnapshot(config.snapshot_path)
    owned_client: SanityClient | None = None
    if resolver is None:
        owned_client = SanityClient.from_config(config) if config.remote_enabled else None
        resolver = ContentResolver(remote=owned_client, snapshot=snapshot)
    try:
        return _export_pages(config, out, resolver, snapshot)
    finally:
        if owned_client is not None:
            owned_client.close()


def _export_pages(
    config: AppConfig,
    out: Path,
    resolver: ContentResolver,
    snapshot: LocalSnapshot,
) -> ExportResult:
    templates = build_templates(config, ImageUrlBuilder.from_config(config), trailing_slash=True)
    result = ExportResult(output_dir=out)

    _write_page(templates, plan_home(None, resolver), out / "index.html")
    result.written.append("index.html")

    for slug in sorted(list_prerender_slugs(snapshot)):
        plan = plan_slug(None, resolver, slug)
        if plan is None:
            LOGGER.warning(
                "Skipping slug with no project or page. slug=%s",
                slug,
                extra={"event": "export_slug_skipped", "slug": slug},
            )
            result.skipped.append(slug)
            continue
        relative = f"{slug}/index.html"
        _write_page(templates, plan, out / relative)
        result.written.append(relative)

    _write_page(templates, plan_not_found(None), out / "404.html")
    result.written.append("404.html")

    shutil.copytree(STATIC_DIR, out / "static", dirs_exist_ok=True)
    LOGGER.info(
        "Static export finished. output=%s pages=%s skipped=%s",
        out,
        len(result.written),
        len(result.skipped),
        extra={
            "event": "export_finished",
            "output_dir": str(out),
            "pages": len(result.written),
            "skipped": list(result.skipped),
        },
    )
    return result


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Export the Glassfaceworld site as static HTML.")
    parser.add_argument("--output-dir", default=DEFAULT_EXPORT_DIR, help="Directory to write the site into.")
    parser.add_argument(
        "--base-path",
        default=DEFAULT_EXPORT_BASE_PATH,
        help="URL prefix the site is served under (use '' for the domain root).",
    )
    parser.add_argument("--snapshot", default="", help="Override the local snapshot path.")
    parser.add_argument("--offline", action="store_true", help="Skip the remote content source.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_app_logging()
    config = replace(AppConfig.from_env(), base_path=normalize_base_path(args.base_path))
    if args.snapshot:
        config = replace(config, snapshot_path=str(Path(args.snapshot).resolve()))
    resolver = None
    if args.offline:
        resolver = ContentResolver(remote=None, snapshot=LocalSnapshot(config.snapshot_path))
    result = export_site(config, args.output_dir, resolver=resolver)
    print(f"Wrote {len(result.written)} files to {result.output_dir}")
    if result.skipped:
        print(f"Skipped slugs: {', '.join(result.skipped)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

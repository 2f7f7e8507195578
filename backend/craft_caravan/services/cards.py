"""HTML fragments for the item, journal and archive listings.

Templates autoescape every interpolated value, so record fields pulled from
the store render as literal text.
"""

import random
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from craft_caravan.utils.text import format_currency, format_date, format_short_date

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

TAPE_PROBABILITY = 0.5
SEAL_PROBABILITY = 0.4

_env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters["currency"] = format_currency
_env.filters["long_date"] = format_date
_env.filters["short_date"] = format_short_date


def render_item_card(item: dict, index: int = 0, rng: random.Random | None = None) -> str:
    """Polaroid-style card for a single item."""
    rng = rng or random
    artisan = item.get("artisan_name") or ""

    # Draw both values every time so a seeded rng gives stable output
    tape_roll = rng.random()
    seal_roll = rng.random()

    location = item.get("location_found") or ""
    images = item.get("image_urls") or []

    return _env.get_template("item_card.html").render(
        item=item,
        delay=f"{index * 0.1:.1f}",
        is_available=item.get("status") == "available",
        add_tape=tape_roll < TAPE_PROBABILITY,
        seal_letter=artisan[:1] if artisan and seal_roll < SEAL_PROBABILITY else "",
        image_url=images[0] if images else None,
        place=location.split(",")[0].strip().upper(),
    )


def render_blog_card(post: dict) -> str:
    return _env.get_template("blog_card.html").render(post=post)


def render_archive_links(collections: list[dict]) -> str:
    """Dropdown links for every collection that is not the current one."""
    archived = [c for c in collections if not c.get("is_current")]
    return _env.get_template("archive_links.html").render(collections=archived)


def render_item_cards(items: list[dict], rng: random.Random | None = None) -> str:
    return "\n".join(render_item_card(item, i, rng) for i, item in enumerate(items))


def render_blog_cards(posts: list[dict]) -> str:
    return "\n".join(render_blog_card(post) for post in posts)

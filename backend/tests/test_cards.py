"""Tests for the item, journal and archive HTML fragments."""

import random

from craft_caravan.services.cards import (
    render_archive_links,
    render_blog_card,
    render_item_card,
    render_item_cards,
)


class _FixedRandom(random.Random):
    """Random source that always returns the same roll."""

    def __init__(self, value: float):
        super().__init__()
        self.value = value

    def random(self) -> float:
        return self.value


ITEM = {
    "id": "item-1",
    "title": "Alpaca Wool Blanket",
    "status": "available",
    "artisan_name": "Rosa Quispe",
    "artisan_story": "Woven on a backstrap loom.",
    "location_found": "Cusco, Peru",
    "date_found": "2024-05-03",
    "price_eur": 120,
    "image_urls": ["https://cdn.example.com/blanket.jpg"],
}


def test_item_card_available():
    html = render_item_card(ITEM, index=2, rng=_FixedRandom(0.99))

    assert 'animation-delay: 0.2s' in html
    assert 'class="claim-btn"' in html
    assert 'data-item-id="item-1"' in html
    assert "05/03/2024 • CUSCO" in html
    assert "€120.00" in html
    assert 'src="https://cdn.example.com/blanket.jpg"' in html
    assert "tape" not in html
    assert "wax-seal" not in html


def test_item_card_decorations():
    html = render_item_card(ITEM, rng=_FixedRandom(0.1))

    assert '<div class="tape"></div>' in html
    assert '<div class="wax-seal">R</div>' in html


def test_item_card_claimed_without_image():
    item = {**ITEM, "status": "claimed", "image_urls": [], "artisan_name": None}
    html = render_item_card(item, rng=_FixedRandom(0.1))

    assert "claim-btn" not in html
    assert "Claimed" in html
    assert "<svg" in html
    assert "wax-seal" not in html


def test_item_card_escapes_record_fields():
    item = {**ITEM, "title": "<script>alert(1)</script>", "artisan_story": '" onmouseover="x'}
    html = render_item_card(item, rng=_FixedRandom(0.99))

    assert "<script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
    assert '" onmouseover="x' not in html


def test_item_cards_stagger_animation():
    html = render_item_cards([ITEM, ITEM], rng=_FixedRandom(0.99))
    assert "animation-delay: 0.0s" in html
    assert "animation-delay: 0.1s" in html


def test_blog_card():
    post = {
        "slug": "weavers of chinchero",
        "title": "Weavers & Dyes",
        "excerpt": "Natural colours.",
        "category": "artisans",
        "published_at": "2024-05-10T09:00:00Z",
        "featured_image": None,
    }
    html = render_blog_card(post)

    assert 'href="pages/blog-post.html?slug=weavers%20of%20chinchero"' in html
    assert "Weavers &amp; Dyes" in html
    assert "May 10, 2024" in html
    assert "linear-gradient" in html


def test_archive_links_skip_current():
    html = render_archive_links(
        [
            {"slug": "peru-2024", "name": "Peru", "is_current": True},
            {"slug": "morocco-2023", "name": "Morocco", "is_current": False},
        ]
    )
    assert "morocco-2023" in html
    assert "peru-2024" not in html


def test_archive_links_placeholder():
    assert "No archives yet" in render_archive_links([{"slug": "x", "name": "X", "is_current": True}])

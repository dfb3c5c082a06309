"""Per-variant normalizers for admin-submitted documents.

Normalizers never reject: missing or wrongly typed fields fall back to
defaults. Shape checks that do reject (payload is not an object, bad season)
happen in the content writer before a normalizer runs. Every normalizer is
idempotent, so ``normalize(normalize(doc)) == normalize(doc)``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum

from ballsville.domain.coercion import (
    as_bool,
    as_clean_str,
    as_dict,
    as_list,
    as_number,
    as_str,
    as_str_list,
    slugify,
)
from ballsville.utils.now import Now

Normalizer = Callable[[Mapping[str, object], int | None], dict[str, object]]


class DocumentVariant(str, Enum):
    """Known document shapes."""

    PAGE = "page"
    LEAGUES = "leagues"
    BIGGAME_ROWS = "biggame_rows"
    ROWS = "rows"
    CONSTITUTION = "constitution"
    POSTS = "posts"
    HALL_OF_FAME = "hall_of_fame"
    MANAGERS = "managers"
    TRACKER = "tracker"


_PAGE_HERO_FIELDS = ("title", "subtitle", "promoImageKey", "promoImageUrl", "updatesHtml")

_LEAGUE_STATUS_ALIASES = {
    "predraft": "predraft",
    "pre_draft": "predraft",
    "pre-draft": "predraft",
    "drafting": "drafting",
    "inseason": "inseason",
    "in_season": "inseason",
    "in-season": "inseason",
    "complete": "complete",
    "filling": "predraft",
    "full": "predraft",
    "tbd": "tbd",
}

_MANAGER_BULLET_LIMIT = 8


def _with_season(doc: dict[str, object], season: int | None) -> dict[str, object]:
    if season is not None:
        doc["season"] = season
    return doc


def _without_stamp(data: Mapping[str, object]) -> dict[str, object]:
    doc = dict(data)
    doc.pop("updatedAt", None)
    return doc


def normalize_page(data: Mapping[str, object], season: int | None) -> dict[str, object]:
    """Editorial page content: opaque blocks pass through, the hero is coerced."""
    doc = _without_stamp(data)
    hero = as_dict(data.get("hero"))
    for name in _PAGE_HERO_FIELDS:
        hero[name] = as_str(hero.get(name))
    doc["hero"] = hero
    return _with_season(doc, season)


def _normalize_league_status(raw: object) -> str:
    return _LEAGUE_STATUS_ALIASES.get(as_str(raw).strip().lower(), "tbd")


def _normalize_league(raw: object, idx: int) -> dict[str, object]:
    league = as_dict(raw)
    not_ready = as_bool(league.get("notReady"))
    return {
        "leagueId": as_str(league.get("leagueId")),
        "sleeperUrl": as_str(league.get("sleeperUrl")),
        "avatarId": as_str(league.get("avatarId")),
        "name": as_str(league.get("name")) or f"League {idx + 1}",
        "url": as_str(league.get("url")),
        "notReady": not_ready,
        "status": "tbd" if not_ready else _normalize_league_status(league.get("status")),
        "active": league.get("active") is not False,
        "order": as_number(league.get("order"), idx + 1),
        "imageKey": as_str(league.get("imageKey")),
        "imageUrl": as_str(league.get("imageUrl")),
    }


def normalize_leagues(data: Mapping[str, object], season: int | None) -> dict[str, object]:
    leagues = [_normalize_league(raw, idx) for idx, raw in enumerate(as_list(data.get("leagues")))]
    leagues.sort(key=lambda league: league["order"])
    for position, league in enumerate(leagues, start=1):
        league["order"] = position
    return _with_season({"leagues": leagues}, season)


def _normalize_biggame_row(raw: object, idx: int, season: int | None) -> dict[str, object]:
    row = as_dict(raw)
    year = as_number(row.get("year"), season) or season
    division_name = as_clean_str(row.get("division_name") or row.get("theme_name")) or "Division"
    division_slug = (
        as_clean_str(row.get("division_slug") or row.get("divisionSlug"))
        or slugify(division_name)
        or f"division-{idx + 1}"
    )
    default_id = f"bg_{year}_{division_slug}_{idx}"
    return {
        "id": as_clean_str(row.get("id")) or default_id,
        "year": year,
        "division_name": division_name,
        "division_slug": division_slug,
        "division_status": as_clean_str(row.get("division_status") or row.get("status")) or "TBD",
        "division_order": as_number(row.get("division_order")),
        "division_blurb": as_clean_str(row.get("division_blurb")) or None,
        "division_image_key": as_clean_str(row.get("division_image_key")) or None,
        "division_image_path": as_clean_str(row.get("division_image_path")) or None,
        "is_division_header": as_bool(row.get("is_division_header")),
        "league_name": as_clean_str(row.get("league_name") or row.get("name")) or f"League {idx + 1}",
        "league_url": as_clean_str(row.get("league_url") or row.get("sleeper_url")) or None,
        "league_status": as_clean_str(row.get("league_status") or row.get("status")) or "TBD",
        "league_image_key": as_clean_str(row.get("league_image_key")) or None,
        "league_image_path": as_clean_str(row.get("league_image_path")) or None,
        "display_order": as_number(row.get("display_order"), idx + 1),
        "spots_available": as_number(row.get("spots_available")),
    }


def _biggame_sort_key(row: dict[str, object]) -> tuple:
    year = row["year"] if isinstance(row["year"], (int, float)) else 0
    division_order = row["division_order"]
    order_key = (0, division_order) if division_order is not None else (1, 0)
    display_order = row["display_order"] if row["display_order"] is not None else 9999
    return (
        -year,
        order_key,
        str(row["division_name"]).lower(),
        not row["is_division_header"],
        display_order,
    )


def normalize_biggame_rows(data: Mapping[str, object], season: int | None) -> dict[str, object]:
    """Big Game directory rows (one per league, plus optional division headers)."""
    rows = [
        _normalize_biggame_row(raw, idx, season) for idx, raw in enumerate(as_list(data.get("rows")))
    ]
    rows.sort(key=_biggame_sort_key)
    return _with_season({"rows": rows}, season)


def normalize_rows(data: Mapping[str, object], season: int | None) -> dict[str, object]:
    rows = [dict(row) for row in as_list(data.get("rows")) if isinstance(row, Mapping)]
    return _with_season({"rows": rows}, season)


def normalize_constitution(data: Mapping[str, object], season: int | None) -> dict[str, object]:
    sections = []
    for idx, raw in enumerate(as_list(data.get("sections"))):
        section = as_dict(raw)
        cleaned = {
            "id": as_clean_str(section.get("id")),
            "title": as_clean_str(section.get("title")),
            "order": as_number(section.get("order"), idx + 1),
            "bodyHtml": as_clean_str(section.get("bodyHtml")),
        }
        if cleaned["id"] and cleaned["title"]:
            sections.append(cleaned)
    sections.sort(key=lambda section: section["order"])
    for position, section in enumerate(sections, start=1):
        section["order"] = position
    return _with_season({"sections": sections}, season)


def _normalize_post(raw: object, idx: int) -> dict[str, object]:
    post = as_dict(raw)
    created_at = post.get("created_at")
    return {
        "id": as_str(post.get("id")) or str(idx),
        "created_at": created_at if isinstance(created_at, str) else Now.as_datetime().isoformat(),
        "title": as_clean_str(post.get("title")),
        "body": as_clean_str(post.get("body")),
        "tags": as_str_list(post.get("tags"), split_on=","),
        "pinned": as_bool(post.get("pinned")),
        "imageKey": as_str(post.get("imageKey")),
        "imageUrl": as_str(post.get("imageUrl")),
    }


def normalize_posts(data: Mapping[str, object], season: int | None) -> dict[str, object]:
    posts = [_normalize_post(raw, idx) for idx, raw in enumerate(as_list(data.get("posts")))]
    return _with_season({"posts": posts}, season)


def _normalize_hall_of_fame_entry(raw: object, idx: int) -> dict[str, object]:
    entry = as_dict(raw)
    return {
        "id": as_str(entry.get("id")) or str(idx),
        "year": as_number(entry.get("year"), ""),
        "title": as_str(entry.get("title")),
        "subtitle": as_str(entry.get("subtitle")),
        "imageKey": as_str(entry.get("imageKey")),
        "imageUrl": as_str(entry.get("imageUrl")),
        "order": as_number(entry.get("order"), idx + 1),
    }


def normalize_hall_of_fame(data: Mapping[str, object], season: int | None) -> dict[str, object]:
    entries = [
        _normalize_hall_of_fame_entry(raw, idx) for idx, raw in enumerate(as_list(data.get("entries")))
    ]
    entries.sort(key=lambda entry: entry["order"] or 0)
    doc = {"title": as_str(data.get("title")) or "Hall of Fame", "entries": entries}
    return _with_season(doc, season)


def _normalize_manager(raw: object, idx: int) -> dict[str, object]:
    manager = as_dict(raw)
    bullets_raw = manager.get("bullets")
    if isinstance(bullets_raw, str):
        bullets_raw = bullets_raw.split("\n")
    bullets = [as_clean_str(item, 160).lstrip("-• \t\r\n") for item in as_list(bullets_raw)]
    return {
        "id": as_clean_str(manager.get("id"), 96) or str(idx),
        "order": as_number(manager.get("order"), idx + 1),
        "name": as_clean_str(manager.get("name"), 120),
        "role": as_clean_str(manager.get("role"), 160),
        "bullets": [bullet for bullet in bullets if bullet][:_MANAGER_BULLET_LIMIT],
        "bio": as_clean_str(manager.get("bio"), 6000),
        "imageKey": as_clean_str(manager.get("imageKey"), 240),
        "imageUrl": as_clean_str(manager.get("imageUrl") or manager.get("image_url"), 800),
        "twitter": as_clean_str(manager.get("twitter"), 240),
        "discord": as_clean_str(manager.get("discord"), 240),
        "sleeper": as_clean_str(manager.get("sleeper"), 240),
    }


def normalize_managers(data: Mapping[str, object], season: int | None) -> dict[str, object]:
    managers = [
        _normalize_manager(raw, idx) for idx, raw in enumerate(as_list(data.get("managers")))
    ]
    managers.sort(key=lambda manager: manager["order"])
    return _with_season({"managers": managers}, season)


def normalize_tracker(data: Mapping[str, object], season: int | None) -> dict[str, object]:
    """Wager trackers are opaque apart from the eligibility import marker."""
    doc = _without_stamp(data)
    eligibility = as_dict(data.get("eligibility"))
    eligibility["computedAt"] = as_str(eligibility.get("computedAt"))
    doc["eligibility"] = eligibility
    return _with_season(doc, season)


NORMALIZERS: dict[DocumentVariant, Normalizer] = {
    DocumentVariant.PAGE: normalize_page,
    DocumentVariant.LEAGUES: normalize_leagues,
    DocumentVariant.BIGGAME_ROWS: normalize_biggame_rows,
    DocumentVariant.ROWS: normalize_rows,
    DocumentVariant.CONSTITUTION: normalize_constitution,
    DocumentVariant.POSTS: normalize_posts,
    DocumentVariant.HALL_OF_FAME: normalize_hall_of_fame,
    DocumentVariant.MANAGERS: normalize_managers,
    DocumentVariant.TRACKER: normalize_tracker,
}


def normalize_document(
    variant: DocumentVariant,
    data: Mapping[str, object],
    season: int | None,
) -> dict[str, object]:
    return NORMALIZERS[variant](data, season)

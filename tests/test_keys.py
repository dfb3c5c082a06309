from ballsville.domain.keys import (
    backup_key,
    backup_meta_key,
    canonical_key,
    is_manifest_key,
    key_extension,
    manifest_key,
    parse_manifest_key,
    strip_leading_slashes,
)
from ballsville.domain.sections import SECTIONS, resolve_section


def test_canonical_key_includes_season_when_present() -> None:
    assert canonical_key("data", "redraft", "leagues", 2025) == "data/redraft/leagues_2025.json"
    assert canonical_key("content", "constitution", "main", None) == "content/constitution/main.json"


def test_manifest_key_shapes() -> None:
    assert manifest_key("redraft", 2025) == "data/manifests/redraft_2025.json"
    assert manifest_key("posts", None) == "data/manifests/posts.json"


def test_backup_keys_sit_next_to_canonical_document() -> None:
    canonical = "data/mini-leagues/wagers_2025.json"
    assert backup_key(canonical, "wk14") == "data/mini-leagues/wagers_2025_wk14_backup.json"
    assert backup_meta_key(canonical, "wk14") == "data/mini-leagues/wagers_2025_wk14_backup_meta.json"


def test_parse_manifest_key_round_trips_section_and_season() -> None:
    assert parse_manifest_key("data/manifests/hall-of-fame.json") == ("hall-of-fame", None)
    assert parse_manifest_key("data/manifests/redraft_2025.json") == ("redraft", 2025)
    assert parse_manifest_key("data/redraft/leagues_2025.json") is None


def test_key_helpers() -> None:
    assert is_manifest_key("data/manifests/x.json")
    assert not is_manifest_key("data/x.json")
    assert key_extension("media/a/b.WEBP") == "webp"
    assert key_extension("media/a.dir/file") == ""
    assert strip_leading_slashes("//data/x.json") == "data/x.json"


def test_every_section_has_distinct_canonical_keys() -> None:
    keys = set()
    for section in SECTIONS.values():
        for kind in section.kinds:
            key = section.canonical_key(2025, kind)
            assert key not in keys
            keys.add(key)


def test_resolved_section_keys() -> None:
    redraft = resolve_section("Redraft")
    assert redraft.canonical_key(2025) == "content/redraft/page_2025.json"
    assert redraft.canonical_key(2025, "leagues") == "data/redraft/leagues_2025.json"
    assert redraft.manifest_key(2025) == "data/manifests/redraft_2025.json"

    posts = resolve_section("posts")
    assert posts.canonical_key(2025) == "data/posts/posts.json"
    assert posts.manifest_key(2025) == "data/manifests/posts.json"

    tracker = resolve_section("mini-leagues-wagers")
    assert tracker.backup_keys(2025) == (
        "data/mini-leagues/wagers_2025_wk14_backup.json",
        "data/mini-leagues/wagers_2025_wk14_backup_meta.json",
    )
    assert redraft.backup_keys(2025) is None

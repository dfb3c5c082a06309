import unittest

from ballsville.domain.sections import SECTIONS, resolve_section
from ballsville.errors import UnknownSectionError


class SectionRegistryTests(unittest.TestCase):
    def test_unknown_section_raises(self) -> None:
        with self.assertRaises(UnknownSectionError):
            resolve_section("fantasy-golf")

    def test_unknown_document_kind_raises(self) -> None:
        with self.assertRaises(UnknownSectionError):
            resolve_section("redraft").document("standings")

    def test_default_kind_is_first_document(self) -> None:
        self.assertEqual(resolve_section("biggame").default_kind, "page")
        self.assertEqual(resolve_section("biggame").kinds, ["page", "leagues"])

    def test_only_trackers_have_snapshot_policies(self) -> None:
        with_policy = sorted(slug for slug, section in SECTIONS.items() if section.snapshot)
        self.assertEqual(
            with_policy,
            ["biggame-wagers", "dynasty-wagers", "mini-leagues-wagers"],
        )
        for slug in with_policy:
            self.assertEqual(SECTIONS[slug].snapshot.marker_path, "eligibility.computedAt")


if __name__ == "__main__":
    unittest.main()

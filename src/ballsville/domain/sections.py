"""Registry of content sections and the documents each one owns."""

from __future__ import annotations

from dataclasses import dataclass

from ballsville.domain.keys import backup_key, backup_meta_key, canonical_key, manifest_key
from ballsville.domain.normalizers import DocumentVariant
from ballsville.errors import UnknownSectionError
from ballsville.utils.normalize_string import normalize_string

DATA = "data"
CONTENT = "content"
ELIGIBILITY_MARKER = "eligibility.computedAt"


@dataclass(frozen=True)
class DocumentSpec:
    """One canonical document kind within a section."""

    kind: str
    category: str
    name: str
    variant: DocumentVariant


@dataclass(frozen=True)
class SnapshotPolicy:
    """Back up the previous document whenever ``marker_path`` changes."""

    marker_path: str
    label: str


@dataclass(frozen=True)
class SectionSpec:
    slug: str
    directory: str
    documents: tuple[DocumentSpec, ...]
    seasoned: bool = True
    snapshot: SnapshotPolicy | None = None

    @property
    def default_kind(self) -> str:
        return self.documents[0].kind

    @property
    def kinds(self) -> list[str]:
        return [document.kind for document in self.documents]

    def document(self, kind: str | None = None) -> DocumentSpec:
        wanted = normalize_string(kind) or self.default_kind
        for document in self.documents:
            if document.kind == wanted:
                return document
        raise UnknownSectionError(f"Unknown document type '{kind}' for section '{self.slug}'")

    def canonical_key(self, season: int | None, kind: str | None = None) -> str:
        document = self.document(kind)
        return canonical_key(
            document.category,
            self.directory,
            document.name,
            season if self.seasoned else None,
        )

    def manifest_key(self, season: int | None) -> str:
        return manifest_key(self.slug, season if self.seasoned else None)

    def backup_keys(self, season: int | None) -> tuple[str, str] | None:
        """Return ``(backup, backup_meta)`` keys for tracker sections."""
        if self.snapshot is None:
            return None
        canonical = self.canonical_key(season)
        return (
            backup_key(canonical, self.snapshot.label),
            backup_meta_key(canonical, self.snapshot.label),
        )


def _page(kind: str = "page") -> DocumentSpec:
    return DocumentSpec(kind=kind, category=CONTENT, name="page", variant=DocumentVariant.PAGE)


def _leagues(variant: DocumentVariant = DocumentVariant.LEAGUES) -> DocumentSpec:
    return DocumentSpec(kind="leagues", category=DATA, name="leagues", variant=variant)


def _tracker(slug: str, directory: str, label: str) -> SectionSpec:
    return SectionSpec(
        slug=slug,
        directory=directory,
        documents=(
            DocumentSpec(kind="tracker", category=DATA, name="wagers", variant=DocumentVariant.TRACKER),
        ),
        snapshot=SnapshotPolicy(marker_path=ELIGIBILITY_MARKER, label=label),
    )


_SECTION_LIST: tuple[SectionSpec, ...] = (
    SectionSpec(
        slug="constitution",
        directory="constitution",
        documents=(
            DocumentSpec("main", CONTENT, "main", DocumentVariant.CONSTITUTION),
        ),
        seasoned=False,
    ),
    SectionSpec(
        slug="dynasty-constitution",
        directory="constitution",
        documents=(
            DocumentSpec("main", CONTENT, "dynasty", DocumentVariant.CONSTITUTION),
        ),
        seasoned=False,
    ),
    SectionSpec(
        slug="posts",
        directory="posts",
        documents=(DocumentSpec("feed", DATA, "posts", DocumentVariant.POSTS),),
        seasoned=False,
    ),
    SectionSpec(
        slug="hall-of-fame",
        directory="hall-of-fame",
        documents=(
            DocumentSpec("entries", DATA, "hall_of_fame", DocumentVariant.HALL_OF_FAME),
        ),
        seasoned=False,
    ),
    SectionSpec(
        slug="about-managers",
        directory="about",
        documents=(DocumentSpec("page", CONTENT, "managers", DocumentVariant.MANAGERS),),
    ),
    SectionSpec(slug="redraft", directory="redraft", documents=(_page(), _leagues())),
    SectionSpec(slug="highlander", directory="highlander", documents=(_page(), _leagues())),
    SectionSpec(slug="gauntlet", directory="gauntlet", documents=(_page(), _leagues())),
    SectionSpec(slug="dynasty", directory="dynasty", documents=(_page(), _leagues())),
    SectionSpec(slug="mini-leagues", directory="mini-leagues", documents=(_page(),)),
    SectionSpec(
        slug="biggame",
        directory="biggame",
        documents=(_page(), _leagues(DocumentVariant.BIGGAME_ROWS)),
    ),
    SectionSpec(
        slug="draft-compare",
        directory="draft-compare",
        documents=(_page(), DocumentSpec("modes", DATA, "modes", DocumentVariant.ROWS)),
    ),
    _tracker("biggame-wagers", "biggame", "wk15"),
    _tracker("mini-leagues-wagers", "mini-leagues", "wk14"),
    _tracker("dynasty-wagers", "dynasty", "wk16"),
)

SECTIONS: dict[str, SectionSpec] = {section.slug: section for section in _SECTION_LIST}


def resolve_section(slug: str | None) -> SectionSpec:
    """Return the registered section for ``slug`` or raise UnknownSectionError."""
    section = SECTIONS.get(normalize_string(slug))
    if section is None:
        raise UnknownSectionError(f"Unknown section '{slug}'")
    return section

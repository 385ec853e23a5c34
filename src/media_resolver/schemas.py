"""
Input schemas for rows delivered by import sources.

Import sources (backup files, catalog scrapers, catalog APIs) hand over
loosely typed rows. These schemas validate and coerce them, then convert
them into engine records. Each category has its own row shape; both map onto
the same TitleField priorities.
"""
from typing import Any, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import IncomingRecord, LibraryRecord, TitleField, TitlePriority
from .resolution.candidate_extractor import split_alternative_titles


def normalize_media_type(value: Optional[str]) -> Optional[str]:
    """
    Canonical book-series media type.

    "Light Novel" and "Web Novel" fold to "light novel"; manhwa, manhua and
    manga are recognized inside longer labels; anything else is lowercased.
    """
    if not value or not str(value).strip():
        return None
    lower = str(value).strip().lower()
    if "light novel" in lower or "novel" in lower:
        return "light novel"
    if "manhwa" in lower:
        return "manhwa"
    if "manhua" in lower:
        return "manhua"
    if "manga" in lower:
        return "manga"
    return lower


def normalize_anime_type(value: Optional[str]) -> Optional[str]:
    """Lowercased anime format (tv, movie, ova...), None when blank."""
    if not value or not str(value).strip():
        return None
    return str(value).strip().lower()


class TitledRow(BaseModel):
    """Fields shared by every category of import row."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    record_id: Optional[Union[int, str]] = Field(default=None, alias="id")
    title: Optional[str] = Field(default=None, alias="titre")
    romaji_title: Optional[str] = Field(default=None, alias="titre_romaji")
    native_title: Optional[str] = Field(default=None, alias="titre_natif")
    english_title: Optional[str] = Field(default=None, alias="titre_anglais")
    alternative_titles: List[str] = Field(default_factory=list, alias="titres_alternatifs")
    legacy_alternative_title: Optional[str] = Field(default=None, alias="titre_alternatif")
    external_id: Optional[int] = Field(
        default=None,
        alias="mal_id",
        description="External catalog id; non-numeric or non-positive values count as absent",
    )

    @field_validator(
        "title", "romaji_title", "native_title", "english_title", "legacy_alternative_title",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("alternative_titles", mode="before")
    @classmethod
    def _split_alternatives(cls, value: Any) -> List[str]:
        return split_alternative_titles(value)

    @field_validator("external_id", mode="before")
    @classmethod
    def _coerce_external_id(cls, value: Any) -> Optional[int]:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, float):
            value = int(value) if value.is_integer() else None
        elif isinstance(value, str):
            value = int(value.strip()) if value.strip().isdecimal() else None
        elif not isinstance(value, int):
            return None
        if value is None or value <= 0:
            return None
        return value

    @property
    def category(self) -> Optional[str]:
        return None

    def title_fields(self) -> Tuple[TitleField, ...]:
        fields = [
            TitleField(self.romaji_title, TitlePriority.ROMANIZED),
            TitleField(self.native_title, TitlePriority.NATIVE),
            TitleField(self.english_title, TitlePriority.ENGLISH),
            TitleField(self.title, TitlePriority.DISPLAY),
        ]
        fields.extend(TitleField(alt, TitlePriority.ALTERNATE) for alt in self.alternative_titles)
        fields.append(TitleField(self.legacy_alternative_title, TitlePriority.ALTERNATE))
        return tuple(f for f in fields if f.text)

    def to_library_record(self) -> LibraryRecord:
        """
        Convert to a corpus record.

        :raises: ValueError if the row has no id
        """
        if self.record_id is None:
            raise ValueError("library rows need an id")
        return LibraryRecord(
            record_id=self.record_id,
            titles=tuple(self.title_fields()),
            external_id=self.external_id,
            category=self.category,
        )

    def to_incoming_record(self, source_label: Optional[str] = None) -> IncomingRecord:
        return IncomingRecord(
            titles=tuple(self.title_fields()),
            external_id=self.external_id,
            category_hint=self.category,
            source_label=source_label,
        )


class SeriesRow(TitledRow):
    """Book, manga, manhwa, manhua or light novel series."""

    media_type: Optional[str] = None
    volume_type: Optional[str] = Field(default=None, alias="type_volume")

    @property
    def category(self) -> Optional[str]:
        return normalize_media_type(self.media_type) or normalize_media_type(self.volume_type)


class AnimeRow(TitledRow):
    """Animated series or film."""

    anime_type: Optional[str] = Field(default=None, alias="type")

    @property
    def category(self) -> Optional[str]:
        return normalize_anime_type(self.anime_type)

"""
Frozen corpus snapshot for a resolution batch.

Extracts each library record's title candidates once, so resolving many
incoming records against the same snapshot does not re-normalize the corpus.
"""
from typing import Iterable, Iterator, List, Optional, Tuple

from ..models import LibraryRecord
from .candidate_extractor import TitleCandidate, extract_candidates

CorpusEntry = Tuple[LibraryRecord, Tuple[TitleCandidate, ...]]


def category_key(value: Optional[str]) -> Optional[str]:
    """Comparison form of a category tag; blank tags count as absent."""
    if value is None:
        return None
    key = str(value).strip().casefold()
    return key or None


class CorpusSnapshot:
    """
    Immutable view of the library records a batch resolves against.

    The snapshot never mutates its records. Callers that insert or update
    records after a decision build a new snapshot for the next batch.
    """

    def __init__(self, records: Iterable[LibraryRecord]):
        """
        Build a snapshot and extract candidates for every record.

        :param records: Library records, in the order ties should favor
        """
        self._entries: Tuple[CorpusEntry, ...] = tuple(
            (record, tuple(extract_candidates(record))) for record in records
        )

    @classmethod
    def _from_entries(cls, entries: Iterable[CorpusEntry]) -> "CorpusSnapshot":
        snapshot = cls.__new__(cls)
        snapshot._entries = tuple(entries)
        return snapshot

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CorpusEntry]:
        return iter(self._entries)

    @property
    def records(self) -> List[LibraryRecord]:
        return [record for record, _ in self._entries]

    def for_category(self, hint: Optional[str]) -> "CorpusSnapshot":
        """
        Narrow the snapshot to records compatible with a category hint.

        Records without a category always stay; a missing hint keeps everything.
        """
        wanted = category_key(hint)
        if wanted is None:
            return self
        return self._from_entries(
            entry for entry in self._entries
            if category_key(getattr(entry[0], "category", None)) in (None, wanted)
        )

    def candidate_pairs(
        self,
        incoming_candidates: Iterable[TitleCandidate],
    ) -> Iterator[Tuple[LibraryRecord, TitleCandidate, TitleCandidate]]:
        """
        Cross product of corpus-side and incoming candidates.

        Yields ``(record, corpus_candidate, incoming_candidate)`` in corpus order,
        then corpus candidate order, then incoming candidate order.
        """
        incoming_candidates = tuple(incoming_candidates)
        for record, candidates in self._entries:
            for corpus_candidate in candidates:
                for incoming_candidate in incoming_candidates:
                    yield record, corpus_candidate, incoming_candidate

    def find_by_external_id(self, external_id: Optional[int]) -> Optional[LibraryRecord]:
        """First record carrying ``external_id``, or None."""
        if external_id is None:
            return None
        for record, _ in self._entries:
            if record.external_id is not None and record.external_id == external_id:
                return record
        return None

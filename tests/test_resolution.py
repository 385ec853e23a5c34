"""
Tests for the resolution tiers and escalation policy.
"""
import pytest

import media_resolver
from media_resolver.config import ResolverConfig
from media_resolver.models import IncomingRecord, LibraryRecord, TitleField, TitlePriority
from media_resolver.resolution import (
    AutoMerge,
    CorpusSnapshot,
    CreateNew,
    ExactTitleMatcher,
    ExternalIdMatcher,
    FuzzyTitleMatcher,
    MatchMethod,
    MatchResult,
    ResolutionPolicy,
    ReviewSuggested,
    create_record_resolver,
)


def make_record(record_id, display=None, romaji=None, english=None, alternates=(),
                external_id=None, category=None):
    titles = [
        TitleField(romaji, TitlePriority.ROMANIZED),
        TitleField(english, TitlePriority.ENGLISH),
        TitleField(display, TitlePriority.DISPLAY),
    ]
    titles.extend(TitleField(alt, TitlePriority.ALTERNATE) for alt in alternates)
    return LibraryRecord(
        record_id=record_id,
        titles=tuple(t for t in titles if t.text),
        external_id=external_id,
        category=category,
    )


def make_incoming(display=None, romaji=None, external_id=None, category_hint=None):
    titles = [
        TitleField(romaji, TitlePriority.ROMANIZED),
        TitleField(display, TitlePriority.DISPLAY),
    ]
    return IncomingRecord(
        titles=tuple(t for t in titles if t.text),
        external_id=external_id,
        category_hint=category_hint,
    )


class TestExternalIdTier:
    """Tests for identifier dominance."""

    def test_identifier_wins_over_unrelated_titles(self):
        """Test that an equal external id matches whatever the titles say."""
        corpus = [
            make_record(1, display="Completely Different"),
            make_record(2, display="Naruto", external_id=42),
        ]
        incoming = make_incoming(display="Completely Different", external_id=42)

        result = ResolutionPolicy().resolve(incoming, corpus)

        assert result.match_method == MatchMethod.EXTERNAL_ID
        assert result.matched_record_id == 2
        assert result.is_exact is True
        assert result.similarity == 100.0
        assert result.matched_title == "Naruto"
        assert result.matched_external_id == 42

    def test_reports_most_trusted_title_without_display(self):
        corpus = [make_record(1, romaji="Shingeki no Kyojin", alternates=["AoT"], external_id=16498)]

        result = ExternalIdMatcher().match(
            make_incoming(external_id=16498), [], CorpusSnapshot(corpus)
        )

        assert result.matched_title == "Shingeki no Kyojin"
        assert result.matched_priority == TitlePriority.ROMANIZED

    def test_missing_identifier_falls_through(self):
        corpus = [make_record(1, display="Naruto", external_id=20)]

        assert ExternalIdMatcher().match(make_incoming(display="Naruto"), [], CorpusSnapshot(corpus)) is None


class TestExactTitleTier:
    """Tests for exact matching on trusted fields."""

    def test_romanized_title_auto_merges(self):
        """Test end to end: romaji agreement is an automatic merge."""
        corpus = [make_record(1, display="Attack on Titan", romaji="Shingeki no Kyojin")]
        incoming = make_incoming(display="Shingeki no Kyojin")

        result = ResolutionPolicy().resolve(incoming, corpus)
        decision = media_resolver.decide(incoming, result)

        assert result.match_method == MatchMethod.TITLE_EXACT
        assert result.matched_priority == TitlePriority.ROMANIZED
        assert result.matched_title == "Shingeki no Kyojin"
        assert result.consecutive_count == len("shingekinokyojin")
        assert isinstance(decision, AutoMerge)
        assert decision.record_id == 1

    def test_normalization_variants_match_exactly(self):
        corpus = [make_record(1, display="Dr. Stone")]

        result = ResolutionPolicy().resolve(make_incoming(display="DR STONE"), corpus)

        assert result.match_method == MatchMethod.TITLE_EXACT
        assert result.matched_title == "Dr. Stone"

    def test_most_trusted_field_wins(self):
        """Test that a romaji agreement beats an earlier display agreement."""
        corpus = [
            make_record(1, display="Bleach"),
            make_record(2, romaji="Bleach", display="BLEACH (Édition Deluxe)"),
        ]

        result = ResolutionPolicy().resolve(make_incoming(display="Bleach"), corpus)

        assert result.matched_record_id == 2
        assert result.matched_priority == TitlePriority.ROMANIZED

    def test_equal_priority_tie_goes_to_first_record(self):
        corpus = [make_record(7, display="Monster"), make_record(3, display="Monster")]

        result = ExactTitleMatcher().match(
            make_incoming(display="Monster"),
            media_resolver.extract_candidates(make_incoming(display="Monster")),
            CorpusSnapshot(corpus),
        )

        assert result.matched_record_id == 7

    def test_alternate_title_is_not_an_exact_match(self):
        """Test that the exact tier ignores alternate-title agreement."""
        corpus = [make_record(3, display="Dungeon Meshi", alternates=["Delicious in Dungeon"])]
        incoming = make_incoming(display="Delicious in Dungeon")

        result = ExactTitleMatcher().match(
            incoming, media_resolver.extract_candidates(incoming), CorpusSnapshot(corpus)
        )

        assert result is None


class TestFuzzyTitleTier:
    """Tests for fuzzy matching and its ranking."""

    def test_alternate_title_agreement_is_suggested_for_review(self):
        """Test that an exact alternate-title agreement surfaces as a review."""
        corpus = [make_record(3, display="Dungeon Meshi", alternates=["Delicious in Dungeon"])]
        incoming = make_incoming(display="Delicious in Dungeon")

        result = ResolutionPolicy().resolve(incoming, corpus)
        decision = media_resolver.decide(incoming, result)

        assert result.match_method == MatchMethod.TITLE_SIMILARITY
        assert result.is_exact is False
        assert result.similarity == 100.0
        assert result.matched_priority == TitlePriority.ALTERNATE
        assert isinstance(decision, ReviewSuggested)
        assert decision.record_id == 3
        assert decision.similarity == 100.0
        assert decision.matched_title == "Delicious in Dungeon"

    def test_short_alternate_title_still_surfaces(self):
        """Test that equal keys bypass the prefix-length gate."""
        corpus = [make_record(4, display="Nana Osaki Story", alternates=["Nana"])]

        result = ResolutionPolicy().resolve(make_incoming(display="NANA"), corpus)

        assert result.matched_record_id == 4
        assert result.matched_title == "Nana"
        assert result.similarity == 100.0

    def test_season_suffix_suggested_for_review(self):
        """Test a subtitle extension above the threshold."""
        corpus = [make_record(2, display="Attack on Titan")]
        incoming = make_incoming(display="Attack on Titan 2nd")

        result = ResolutionPolicy().resolve(incoming, corpus)
        decision = media_resolver.decide(incoming, result)

        assert result.similarity == 81.25
        assert result.consecutive_count == 13
        assert decision == ReviewSuggested(
            record_id=2, similarity=81.25, matched_title="Attack on Titan", match=result
        )

    def test_long_season_suffix_falls_below_threshold(self):
        """Test that 'Season 2' scores 65 against the bare title and is new."""
        corpus = [make_record(2, display="Attack on Titan")]
        incoming = make_incoming(display="Attack on Titan Season 2")

        result = ResolutionPolicy().resolve(incoming, corpus)

        assert result is None
        assert isinstance(media_resolver.decide(incoming, result), CreateNew)

    def test_lower_threshold_accepts_long_suffix(self):
        policy = ResolutionPolicy(tiers=[FuzzyTitleMatcher(threshold=60.0)])

        result = policy.resolve(
            make_incoming(display="Attack on Titan Season 2"),
            [make_record(2, display="Attack on Titan")],
        )

        assert result.similarity == 65.0

    def test_short_shared_prefix_is_rejected(self):
        """Test that four shared leading characters are not enough."""
        corpus = [make_record(1, display="One Peace")]

        assert ResolutionPolicy().resolve(make_incoming(display="One Piece"), corpus) is None

    def test_field_priority_beats_similarity(self):
        """Test that a display-title hit beats a closer alternate-title hit."""
        corpus = [
            make_record(1, display="Something Else", alternates=["Frieren Beyond J"]),
            make_record(2, display="Frieren Beyo"),
        ]

        result = ResolutionPolicy().resolve(make_incoming(display="Frieren Beyond"), corpus)

        assert result.matched_record_id == 2
        assert result.similarity == 84.62
        assert result.matched_priority == TitlePriority.DISPLAY

    def test_longer_prefix_beats_similarity(self):
        """Test that the anchored prefix ranks before similarity."""
        corpus = [
            make_record(2, display="abcdefgzij"),
            make_record(1, display="abcdefghxy"),
        ]

        result = ResolutionPolicy().resolve(make_incoming(display="abcdefghij"), corpus)

        assert result.matched_record_id == 1
        assert result.consecutive_count == 8
        assert result.similarity == 80.0

    def test_full_tie_goes_to_first_record(self):
        corpus = [
            make_record(1, display="Berserk Deluxe"),
            make_record(2, display="Berserk Deluxe"),
        ]

        result = ResolutionPolicy().resolve(make_incoming(display="Berserk Deluxe Ed"), corpus)

        assert result.matched_record_id == 1
        assert result.similarity == 86.67

    @pytest.mark.parametrize("kwargs", [
        {"threshold": 100.5},
        {"threshold": -1},
        {"min_consecutive": 0},
    ])
    def test_invalid_parameters(self, kwargs):
        with pytest.raises(ValueError):
            FuzzyTitleMatcher(**kwargs)


class TestResolutionPolicy:
    """Tests for ResolutionPolicy escalation."""

    def test_category_hint_prunes_title_tiers(self):
        """Test that records of another category are not title-matched."""
        corpus = [
            make_record(1, display="Monster", category="tv"),
            make_record(2, display="Monster", category="manga"),
        ]

        result = ResolutionPolicy().resolve(
            make_incoming(display="Monster", category_hint="Manga"), corpus
        )

        assert result.matched_record_id == 2

    def test_untyped_records_pass_category_filter(self):
        corpus = [
            make_record(1, display="Monster", category="tv"),
            make_record(3, display="Monster"),
        ]

        result = ResolutionPolicy().resolve(
            make_incoming(display="Monster", category_hint="manga"), corpus
        )

        assert result.matched_record_id == 3

    def test_category_mismatch_gives_no_match(self):
        corpus = [make_record(1, display="Monster", category="tv")]

        assert ResolutionPolicy().resolve(
            make_incoming(display="Monster", category_hint="manga"), corpus
        ) is None

    def test_identifier_tier_ignores_category(self):
        """Test that an external id match crosses categories."""
        corpus = [make_record(1, display="Monster", category="tv", external_id=7)]

        result = ResolutionPolicy().resolve(
            make_incoming(display="Monster", external_id=7, category_hint="manga"), corpus
        )

        assert result.match_method == MatchMethod.EXTERNAL_ID
        assert result.matched_record_id == 1

    @pytest.mark.parametrize("incoming", [
        IncomingRecord(),
        make_incoming(display="!!!"),
        make_incoming(display="   "),
    ])
    def test_record_without_usable_title_or_id(self, incoming):
        corpus = [make_record(1, display="Naruto")]

        assert ResolutionPolicy().resolve(incoming, corpus) is None

    def test_empty_corpus(self):
        assert ResolutionPolicy().resolve(make_incoming(display="Naruto"), []) is None

    def test_snapshot_and_list_give_same_result(self):
        records = [make_record(1, display="Attack on Titan"), make_record(2, display="Naruto")]
        incoming = make_incoming(display="Naruto")
        policy = ResolutionPolicy()

        assert policy.resolve(incoming, records) == policy.resolve(incoming, CorpusSnapshot(records))

    def test_module_level_resolve_uses_defaults(self):
        corpus = [make_record(1, display="Naruto")]

        result = media_resolver.resolve(make_incoming(display="naruto"), corpus)

        assert result.match_method == MatchMethod.TITLE_EXACT

    def test_empty_tier_list_rejected(self):
        with pytest.raises(ValueError):
            ResolutionPolicy(tiers=[])

    def test_default_tier_order(self):
        names = [tier.name for tier in ResolutionPolicy().tiers]

        assert names == ["external_id", "title_exact", "title_similarity"]

    def test_factory_without_fuzzy_tier(self):
        """Test that disabling fuzzy matching leaves only id and exact tiers."""
        resolver = create_record_resolver(ResolverConfig(enable_fuzzy_matching=False))
        corpus = [make_record(2, display="Attack on Titan")]

        assert resolver.resolve(make_incoming(display="Attack on Titan 2nd"), corpus) is None
        assert resolver.resolve(make_incoming(display="Attack on Titan"), corpus) is not None

    def test_factory_passes_threshold(self):
        resolver = create_record_resolver(ResolverConfig(fuzzy_similarity_threshold=60.0))
        corpus = [make_record(2, display="Attack on Titan")]

        result = resolver.resolve(make_incoming(display="Attack on Titan Season 2"), corpus)

        assert result.matched_record_id == 2


class TestMatchResult:
    """Tests for MatchResult."""

    def test_similarity_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            MatchResult(
                matched_record_id=1,
                is_exact=False,
                similarity=101.0,
                matched_title="Naruto",
                matched_priority=TitlePriority.DISPLAY,
                match_method=MatchMethod.TITLE_SIMILARITY,
            )

    def test_plain_values_are_coerced(self):
        result = MatchResult(
            matched_record_id=1,
            is_exact=True,
            similarity=100.0,
            matched_title="Naruto",
            matched_priority=4,
            match_method="title_exact",
        )

        assert result.matched_priority is TitlePriority.DISPLAY
        assert result.match_method is MatchMethod.TITLE_EXACT
        assert result.to_dict()["match_method"] == "title_exact"
        assert result.to_dict()["matched_priority"] == 4

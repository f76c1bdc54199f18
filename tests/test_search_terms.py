"""
Unit Tests for Search Term Generation
"""

from core.schemas import VerbRecord
from services.verbs.search_terms import generate_search_terms


class TestGenerateSearchTerms:
    """Tests for the denormalized search_terms value."""

    def test_forms_definition_words_and_contexts(self, go_verb):
        """Forms, long definition words and context labels are all indexed."""
        assert generate_search_terms(go_verb) == "go went gone move travel place movement progress"

    def test_deterministic(self, go_verb):
        assert generate_search_terms(go_verb) == generate_search_terms(go_verb.model_copy(deep=True))

    def test_lowercases_everything(self, verb_factory):
        verb = verb_factory("x", "Go", "Went", "Gone", definition="Travel Far", contexts=["Movement"])
        terms = generate_search_terms(verb).split()
        assert terms == ["go", "went", "gone", "travel", "far", "movement"]

    def test_short_words_skipped(self, verb_factory):
        """Words of two characters or fewer never become terms."""
        verb = verb_factory("do", "do", "did", "done", definition="to do it or be")
        assert generate_search_terms(verb) == "do did done"

    def test_dialect_overrides_included_once(self, get_verb):
        terms = generate_search_terms(get_verb).split()
        assert terms[:4] == ["get", "got", "got/gotten", "gotten"]
        assert terms.count("got") == 1

    def test_empty_overrides_skipped(self, verb_factory):
        verb = verb_factory("be", "be", "was/were", "been")
        assert generate_search_terms(verb) == "be was/were been"

    def test_no_duplicate_tokens(self, verb_factory):
        verb = verb_factory(
            "read", "read", "read", "read",
            definition="read and read again",
            contexts=["read"],
        )
        assert generate_search_terms(verb) == "read and again"

    def test_every_meaning_contributes(self):
        verb = VerbRecord.model_validate({
            "id": "31",
            "base": "run",
            "past": "ran",
            "participle": "run",
            "meanings": [
                {"definition": "move quickly", "partOfSpeech": "verb"},
                {
                    "definition": "manage a business",
                    "partOfSpeech": "verb",
                    "contextualUsages": [{"context": "operation", "description": "To operate"}],
                },
            ],
        })
        terms = generate_search_terms(verb).split()
        assert "quickly" in terms
        assert "business" in terms
        assert "operation" in terms

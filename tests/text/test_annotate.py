from __future__ import annotations

from hypothesis import given, strategies as st

from claimlens.models.claim import RoleSpan
from claimlens.models.segments import AnnotatedSegment
from claimlens.text.annotate import annotate


def _roles(segments):
    return [(s.text, s.role) for s in segments]


def test_annotation_keeps_sentence_casing():
    segments = annotate(
        "Hamas militants attacked Israel",
        [RoleSpan(word="hamas militants", role="Agent")],
    )
    assert _roles(segments) == [("Hamas militants", "Agent"), (" attacked Israel", None)]


def test_longest_role_word_claims_the_phrase_first():
    roles = [
        RoleSpan(word="Israel", role="Patient"),
        RoleSpan(word="Northern Israel", role="Location"),
    ]
    segments = annotate("forces entered Northern Israel", roles)
    assert _roles(segments) == [
        ("forces entered ", None),
        ("Northern Israel", "Location"),
    ]


def test_every_occurrence_is_annotated():
    segments = annotate("Israel struck Israel", [RoleSpan(word="israel", role="Patient")])
    assert _roles(segments) == [
        ("Israel", "Patient"),
        (" struck ", None),
        ("Israel", "Patient"),
    ]


def test_action_flag_is_carried():
    segments = annotate(
        "Residents were evacuated",
        [
            RoleSpan(word="Residents", role="Patient"),
            RoleSpan(word="were evacuated", role="Action", is_action=True),
        ],
    )
    assert segments == [
        AnnotatedSegment("Residents", "Patient", False),
        AnnotatedSegment(" ", None, False),
        AnnotatedSegment("were evacuated", "Action", True),
    ]


def test_regex_metacharacters_are_literal():
    segments = annotate(
        "Prices rose (sharply) by 5.0% not 5x0",
        [RoleSpan(word="(sharply)", role="Manner"), RoleSpan(word="5.0%", role="Extent")],
    )
    assert ("(sharply)", "Manner") in _roles(segments)
    assert ("5.0%", "Extent") in _roles(segments)
    assert segments[-1] == AnnotatedSegment(" not 5x0")


def test_empty_role_word_is_skipped():
    segments = annotate("Rockets fell", [RoleSpan(word="", role="Agent")])
    assert segments == [AnnotatedSegment("Rockets fell")]


def test_compound_role_label_is_passed_through():
    segments = annotate(
        'He said "we will respond"',
        [RoleSpan(word='"we will respond"', role="Content.quote")],
    )
    assert segments[-1].role == "Content.quote"


def test_input_roles_are_not_reordered():
    roles = [RoleSpan(word="a", role="X"), RoleSpan(word="abc", role="Y")]
    annotate("abc a", roles)
    assert [r.word for r in roles] == ["a", "abc"]


def test_no_roles_returns_whole_sentence():
    assert annotate("Rockets fell", []) == [AnnotatedSegment("Rockets fell")]


_alphabet = st.sampled_from("abAB .(")


@given(
    sentence=st.text(alphabet=_alphabet, max_size=40),
    words=st.lists(st.text(alphabet=_alphabet, max_size=5), max_size=5),
)
def test_segments_reconstruct_sentence(sentence, words):
    roles = [RoleSpan(word=w, role=f"R{i}") for i, w in enumerate(words)]
    segments = annotate(sentence, roles)
    assert "".join(s.text for s in segments) == sentence
    if len(segments) > 1:
        assert all(s.text for s in segments)

from __future__ import annotations

"""Ranking, selection and fallback tests."""

from omnirag.rag.context import NO_CONTEXT, assemble
from omnirag.rag.retrieval import rank, recency_key, retrieve, select
from omnirag.rag.types import Document


def make_doc(
    doc_id: str,
    title: str = "Untitled",
    content: str = "",
    upload_date: str = "2024-01-01",
    active: bool = True,
) -> Document:
    return Document(
        id=doc_id,
        title=title,
        content=content,
        upload_date=upload_date,
        active=active,
    )


def test_remote_work_policy_is_selected_by_phrase_match() -> None:
    policy = make_doc(
        "policy",
        title="Remote Work Policy",
        content="This policy defines remote work eligibility for employees.",
        upload_date="2024-02-10",
    )
    selected = select("remote work eligibility", [policy])
    assert selected == [policy]
    # content phrase +10, "remote" and "work" +1 content +3 title, "eligibility" +1 content
    assert rank("remote work eligibility", [policy])[0].score == 19


def test_fallback_returns_active_document_when_nothing_matches() -> None:
    report = make_doc("report", title="Report", content="banana")
    retrieval = retrieve("xylophone", [report])
    assert retrieval.fallback is True
    assert list(retrieval.documents) == [report]
    assert select("xylophone", [report]) == [report]


def test_equal_scores_prefer_most_recent_upload() -> None:
    older = make_doc("older", title="Notes", content="budget review", upload_date="2024-01-01")
    newer = make_doc("newer", title="Notes", content="budget review", upload_date="2024-06-01")
    selected = select("budget", [older, newer])
    assert [doc.id for doc in selected] == ["newer", "older"]


def test_all_inactive_documents_yield_empty_selection_and_sentinel() -> None:
    docs = [
        make_doc("a", title="Remote Work Policy", content="remote work", active=False),
        make_doc("b", title="Report", content="banana", active=False),
    ]
    selected = select("remote work", docs)
    assert selected == []
    assert assemble(selected) == NO_CONTEXT


def test_empty_collection_returns_empty() -> None:
    assert select("anything", []) == []
    assert retrieve("anything", []).fallback is False


def test_higher_score_outranks_recency() -> None:
    relevant = make_doc(
        "relevant", title="Refund Process", content="refund steps", upload_date="2023-01-01"
    )
    recent = make_doc("recent", title="Apollo", content="refund mention", upload_date="2025-01-01")
    selected = select("refund", [recent, relevant])
    assert [doc.id for doc in selected] == ["relevant", "recent"]


def test_zero_score_documents_are_excluded_when_some_match() -> None:
    match = make_doc("match", title="Warranty", content="15 years", upload_date="2024-01-01")
    other = make_doc("other", title="Chemistry", content="LFP cells", upload_date="2025-01-01")
    assert select("warranty", [match, other]) == [match]


def test_limit_caps_selection_and_inactive_documents_are_skipped() -> None:
    docs = [
        make_doc(f"doc-{idx}", title=f"Doc {idx}", content="shared topic", upload_date=f"2024-01-{idx:02d}")
        for idx in range(1, 9)
    ]
    docs.append(make_doc("hidden", title="Shared Topic", content="shared topic", active=False))
    selected = select("shared topic", docs)
    assert len(selected) == 5
    assert all(doc.active for doc in selected)
    assert [doc.id for doc in selected] == ["doc-8", "doc-7", "doc-6", "doc-5", "doc-4"]
    assert len(select("shared topic", docs, limit=2)) == 2


def test_fallback_respects_limit_and_recency_order() -> None:
    docs = [
        make_doc(f"doc-{idx}", content="unrelated", upload_date=f"2024-0{idx}-15")
        for idx in range(1, 8)
    ]
    retrieval = retrieve("xylophone", docs, limit=3)
    assert retrieval.fallback is True
    assert [doc.id for doc in retrieval.documents] == ["doc-7", "doc-6", "doc-5"]


def test_invalid_dates_do_not_break_selection() -> None:
    broken = make_doc("broken", content="unrelated", upload_date="not a date")
    dated = make_doc("dated", content="unrelated", upload_date="2024-03-01")
    selected = select("xylophone", [broken, dated])
    assert [doc.id for doc in selected] == ["dated", "broken"]


def test_recency_key_parsing() -> None:
    assert recency_key("1970-01-02") == 86400.0
    assert recency_key("2024-06-01") > recency_key("2024-01-01")
    assert recency_key("2024-06-01T00:00:00Z") == recency_key("2024-06-01")
    assert recency_key("") == 0.0
    assert recency_key("garbage") == 0.0


def test_select_is_idempotent_and_does_not_mutate_input() -> None:
    docs = [
        make_doc("a", title="Alpha", content="policy text", upload_date="2024-01-01"),
        make_doc("b", title="Beta", content="policy text", upload_date="2024-02-01"),
        make_doc("c", title="Policy", content="other", upload_date="2023-02-01"),
    ]
    original = list(docs)
    first = select("policy", docs)
    second = select("policy", docs)
    assert first == second
    assert docs == original


def test_select_accepts_generators_as_snapshot() -> None:
    docs = [make_doc("a", title="Alpha", content="policy")]
    assert select("policy", (doc for doc in docs)) == docs

from hypothesis import given
from hypothesis import strategies as st

from planlink.core.submission import build_project_draft, split_owner_and_repo

segment = st.text(
    alphabet=st.characters(exclude_characters="/", exclude_categories=("Cs",)),
    max_size=20,
)


@given(segment, segment)
def test_owner_and_repo_round_trip_through_separator(owner: str, repo: str) -> None:
    assert split_owner_and_repo(f"{owner}/{repo}") == (owner, repo)


@given(segment)
def test_missing_separator_leaves_repo_empty(owner: str) -> None:
    assert split_owner_and_repo(owner) == (owner, "")


@given(segment, segment, segment, segment)
def test_draft_never_keeps_flat_repo_key(origin: str, plan_path: str, owner: str, repo: str) -> None:
    draft = build_project_draft(
        {"repo": repo, "origin": origin, "plan_path": plan_path},
        f"{owner}/{repo}",
    )
    dumped = draft.model_dump()
    assert set(dumped) == {"origin", "plan_path", "github"}
    assert dumped["github"] == {"organization": owner, "repo": repo}

"""Tests for the fuzzy finder"""
import io
import itertools

import pytest
from rich.console import Console

from git_worktree_keeper.exceptions import NoWorktreesError
from git_worktree_keeper.models.worktree import WorktreeRecord
from git_worktree_keeper.ui.fuzzy import FuzzyFinder, fuzzy_match, highlight_match

BRANCHES = ["main", "feature-auth", "feature-ui", "bugfix-login"]


def make_worktrees(branches):
    worktrees = []
    for i, branch in enumerate(branches):
        path = "/repo" if i == 0 else f"/repo/.worktree/{branch}"
        worktrees.append(WorktreeRecord(path=path, branch=branch, is_main=(i == 0)))
    return worktrees


def scripted(*answers):
    """Prompt replacement that replays answers, then signals end of input."""
    remaining = list(answers)
    asked = []

    def prompt(message):
        asked.append(message)
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    prompt.asked = asked
    return prompt


@pytest.fixture
def output():
    return Console(file=io.StringIO(), width=120, color_system=None)


def make_finder(output, *answers, branches=BRANCHES, **kwargs):
    return FuzzyFinder(make_worktrees(branches), output=output, prompt=scripted(*answers), **kwargs)


class TestFuzzyMatch:
    """Test subsequence matching."""

    @pytest.mark.parametrize("target,query,expected", [
        ("feature-auth", "feath", True),
        ("feature-auth", "fa", True),
        ("feature-auth", "feature-auth", True),
        ("feature-auth", "", True),
        ("feature-auth", "htuaf", False),
        ("feature-ui", "feath", False),
        ("main", "mainx", False),
        ("", "a", False),
        ("", "", True),
    ])
    def test_fuzzy_match(self, target, query, expected):
        """Test in-order character matching."""
        assert fuzzy_match(target, query) is expected

    def test_prefix_monotonic(self):
        """Test that every prefix of a matching query also matches."""
        targets = BRANCHES + ["release-2024", "hotfix/payment-timeout", "aaa"]
        queries = ["feath", "rls24", "hfpt", "mn", "aaaa", "fxlgn", "ture-u"]

        for target, query in itertools.product(targets, queries):
            if fuzzy_match(target, query):
                for k in range(len(query) + 1):
                    assert fuzzy_match(target, query[:k]), (target, query[:k])


class TestHighlightMatch:
    """Test highlighting of the substring match."""

    def test_highlights_case_insensitively(self):
        """Test the first substring occurrence is wrapped in markup."""
        assert highlight_match("feature-auth", "AUTH") == "feature-[bold yellow]auth[/bold yellow]"

    def test_no_substring_match(self):
        """Test subsequence-only matches are not highlighted."""
        assert highlight_match("feature-auth", "feath") == "feature-auth"

    def test_escapes_markup(self):
        """Test branch names that look like markup are escaped."""
        assert "\\[" in highlight_match("[wip]-x", "x")


class TestFuzzySearch:
    """Test ranking of candidates."""

    def test_subsequence_only_match(self, output):
        """Test the query that matches only by subsequence."""
        finder = make_finder(output)

        assert [wt.branch for wt in finder.fuzzy_search("feath")] == ["feature-auth"]

    def test_substring_matches_first(self, output):
        """Test substring matches precede subsequence matches."""
        finder = make_finder(output, branches=["main", "fix-login", "login", "l-o-g-i-n"])

        assert [wt.branch for wt in finder.fuzzy_search("login")] == [
            "fix-login",
            "login",
            "l-o-g-i-n",
        ]

    def test_case_insensitive(self, output):
        """Test queries ignore case."""
        finder = make_finder(output, branches=["main", "Feature-Auth"])

        assert [wt.branch for wt in finder.fuzzy_search("FEAT")] == ["Feature-Auth"]

    def test_empty_query_returns_all(self, output):
        """Test that an empty query keeps every worktree."""
        finder = make_finder(output)

        assert len(finder.fuzzy_search("")) == len(BRANCHES)

    def test_no_matches(self, output):
        """Test a query nothing matches."""
        assert make_finder(output).fuzzy_search("zzz") == []

    def test_subsequence_pass_skipped_when_enough(self, output):
        """Test subsequence matches are not added once max_show substring matches exist."""
        branches = ["main"] + [f"feat-{i}" for i in range(3)] + ["f-e-a-t"]
        finder = make_finder(output, branches=branches, max_show=3)

        assert [wt.branch for wt in finder.fuzzy_search("feat")] == ["feat-0", "feat-1", "feat-2"]

    def test_collection_capped(self, output):
        """Test subsequence collection stops at max_collect."""
        branches = ["main", "x-ab"] + [f"a-{i}-b" for i in range(30)]
        finder = make_finder(output, branches=branches)

        matches = finder.fuzzy_search("ab")

        assert len(matches) == 20
        assert matches[0].branch == "x-ab"


class TestSearchLoop:
    """Test the interactive loop."""

    def test_single_match_confirmed(self, output):
        """Test typing a query and confirming the only match."""
        finder = make_finder(output, "feath", "")

        selected = finder.search()

        assert selected.branch == "feature-auth"
        assert "Press Enter to select 'feature-auth'" in finder.prompt.asked[-1]

    def test_numeric_pick_uses_full_list(self, output):
        """Test a bare number selects from the unfiltered list."""
        assert make_finder(output, "3").search().branch == "feature-ui"

    def test_numeric_out_of_range(self, output):
        """Test an invalid number is reported and the loop continues."""
        finder = make_finder(output, "9", "q")

        assert finder.search() is None
        assert "Invalid selection: 9 (range: 1-4)" in output.file.getvalue()

    def test_superscript_digit_is_a_query(self, output):
        """Test digit-like characters int() rejects are searched, not parsed."""
        finder = make_finder(output, "²", "q")

        assert finder.search() is None
        assert "No matches for: ²" in output.file.getvalue()

    @pytest.mark.parametrize("answer", ["q", "quit", "Q", " quit "])
    def test_quit(self, output, answer):
        """Test the quit inputs cancel."""
        assert make_finder(output, answer).search() is None

    def test_end_of_input_cancels(self, output):
        """Test that end of input cancels."""
        assert make_finder(output).search() is None

    def test_end_of_input_at_confirmation(self, output):
        """Test that end of input at the confirmation prompt cancels."""
        assert make_finder(output, "-ui").search() is None

    def test_several_matches_keep_asking(self, output):
        """Test that multiple matches lead back to the query prompt."""
        finder = make_finder(output, "feature", "-ui", "")

        assert finder.search().branch == "feature-ui"
        assert finder.prompt.asked[:2] == ["> ", "> "]

    def test_refinement_becomes_next_query(self, output):
        """Test typing at the confirmation prompt starts a new search."""
        finder = make_finder(output, "main", "bug", "")

        assert finder.search().branch == "bugfix-login"
        assert finder.prompt.asked.count("> ") == 1

    def test_no_matches_shown(self, output):
        """Test the no-match notice."""
        finder = make_finder(output, "zzz", "q")

        assert finder.search() is None
        assert "No matches for: zzz" in output.file.getvalue()

    def test_results_numbered_by_full_list(self, output):
        """Test shown numbers can be typed back in."""
        finder = make_finder(output, "bug", "q")

        finder.search()

        assert "4) bugfix-login" in output.file.getvalue()

    def test_more_results_notice(self, output):
        """Test the overflow notice when results exceed max_show."""
        branches = ["main"] + [f"task-{i}" for i in range(12)]
        finder = make_finder(output, "task", "q", branches=branches)

        finder.search()

        assert "... and 2 more (refine search to see more)" in output.file.getvalue()

    def test_single_worktree_returned(self, output):
        """Test that one worktree is returned without prompting."""
        finder = make_finder(output, branches=["main"])

        assert finder.search().branch == "main"
        assert finder.prompt.asked == []

    def test_no_worktrees(self, output):
        """Test that an empty list is an error."""
        with pytest.raises(NoWorktreesError):
            FuzzyFinder([], output=output, prompt=scripted()).search()


class TestFormatResult:
    """Test result line rendering."""

    def test_main_clean(self, output):
        """Test the main worktree line."""
        finder = make_finder(output)

        assert finder.format_result(finder.worktrees[0], "") == "main 🏠"

    def test_dirty_with_divergence(self, output):
        """Test change count and divergence are appended."""
        wt = WorktreeRecord(path="/w", branch="feat", is_clean=False, modified=2, added=1, ahead=3)
        finder = make_finder(output)

        assert finder.format_result(wt, "") == "feat 🌱 ⚠️3 +3/-0"

"""
End-to-end tests for Chef.cook.

Uses a one-token-per-character tokenizer so budgets can be reasoned about
exactly.
"""

import asyncio

import pytest
from unittest.mock import MagicMock

from core.abstractions import Recipe
from core.errors import ContractViolation, UnresolvedToken
from core.interfaces import CookResult, OrderItem


class SystemDirective(Recipe):
    priority = 20

    async def prepare(self):
        return "d" * 180


class ConversationHistory(Recipe):
    ingredients = ("sessionId",)
    priority = 20
    compressible = True
    summary_recipe = "ConversationHistorySummary"

    async def prepare(self, session_id):
        return "h" * 900


class ConversationHistorySummary(Recipe):
    ingredients = ("ConversationHistory",)

    async def prepare(self, history):
        return "s" * 200


@pytest.fixture
def hitl_chef(book, make_chef):
    book.register("SystemDirective", SystemDirective)
    book.register("ConversationHistory", ConversationHistory)
    book.register("ConversationHistorySummary", ConversationHistorySummary)
    return make_chef({"sessionId": "1234"})


class TestCookWithoutBudget:
    """Test cooking without a budget"""

    @pytest.mark.asyncio
    async def test_returns_context_string(self, book, make_chef):
        book.register_function("A", lambda: "Alpha")
        book.register_function("B", lambda: "Beta")

        context = await make_chef().cook(["A", "B"])

        assert context == "Alpha\n\nBeta\n"

    @pytest.mark.asyncio
    async def test_all_items_at_baseline(self, hitl_chef, length_tokenizer):
        result = await hitl_chef.cook(
            ["SystemDirective", "ConversationHistory"],
            count_tokens=length_tokenizer,
            explain=True,
        )

        assert isinstance(result, CookResult)
        assert result.budget is None
        assert result.total_tokens == 180 + 900
        assert [p.decision for p in result.plates] == ["included", "included"]
        assert all(p.reason == "no budget provided" for p in result.plates)
        assert not any(p.was_compressed for p in result.plates)

    @pytest.mark.asyncio
    async def test_default_order_is_registration_order(self, book, make_chef):
        book.register_function("First", lambda: "1")
        book.register_function("Second", lambda: "2")

        result = await make_chef().cook(explain=True)

        assert [p.token for p in result.plates] == ["First", "Second"]
        assert result.context == "1\n\n2\n"

    @pytest.mark.asyncio
    async def test_empty_order_with_empty_cookbook(self, make_chef):
        result = await make_chef().cook([], budget=10, explain=True)

        assert result.context == ""
        assert result.total_tokens == 0
        assert result.plates == []


class TestCookWithBudget:
    """Test budget planning through cook"""

    @pytest.mark.asyncio
    async def test_history_compressed_to_fit(self, hitl_chef, length_tokenizer):
        result = await hitl_chef.cook(
            ["SystemDirective", "ConversationHistory"],
            budget=1000,
            count_tokens=length_tokenizer,
            explain=True,
        )

        assert result.total_tokens == 380
        assert result.budget == 1000
        directive, history = result.plates

        assert directive.decision == "forced-include"
        assert directive.reason == "first item is always included"
        assert (directive.running_total_before, directive.running_total_after) == (0, 180)

        assert history.decision == "included"
        assert history.reason == "compressed to fit budget"
        assert history.was_compressed
        assert history.compression_note == "compressed via ConversationHistorySummary"
        assert history.original_cost == 900
        assert history.compressed_cost == 200
        assert history.cost == 200
        assert (history.running_total_before, history.running_total_after) == (180, 380)
        assert history.priority_tag == 20
        assert history.priority_score == 20

        assert result.context == "d" * 180 + "\n\n" + "s" * 200 + "\n"

    @pytest.mark.asyncio
    async def test_first_item_forced_over_budget(self, hitl_chef, length_tokenizer):
        result = await hitl_chef.cook(
            ["SystemDirective", "ConversationHistory"],
            budget=100,
            count_tokens=length_tokenizer,
            explain=True,
        )

        directive, history = result.plates
        assert directive.decision == "forced-include"
        assert history.decision == "dropped"
        assert history.reason == "excluded due to budget/priority"
        assert history.cost == 200
        assert history.running_total_before == history.running_total_after == 180
        assert result.total_tokens == 180
        assert result.context == "d" * 180 + "\n"

    @pytest.mark.asyncio
    async def test_plates_in_original_order(self, book, make_chef, length_tokenizer):
        book.register_function("Low", lambda: "l" * 30, priority="low")
        book.register_function("Critical", lambda: "c" * 30, priority="critical")
        book.register_function("Head", lambda: "h" * 10)

        result = await make_chef().cook(
            ["Head", "Low", "Critical"],
            budget=45,
            count_tokens=length_tokenizer,
            explain=True,
        )

        assert [p.token for p in result.plates] == ["Head", "Low", "Critical"]
        assert [p.decision for p in result.plates] == ["forced-include", "dropped", "included"]
        assert [(p.running_total_before, p.running_total_after) for p in result.plates] == [
            (0, 10), (10, 10), (10, 40),
        ]

    @pytest.mark.asyncio
    async def test_running_totals_follow_original_order(self, book, make_chef, length_tokenizer):
        book.register_function("Head", lambda: "h" * 10)
        book.register_function("Later", lambda: "l" * 20, priority=10)
        book.register_function("Urgent", lambda: "u" * 30, priority=90)

        result = await make_chef().cook(
            ["Head", "Later", "Urgent"],
            budget=100,
            count_tokens=length_tokenizer,
            explain=True,
        )

        assert [(p.running_total_before, p.running_total_after) for p in result.plates] == [
            (0, 10), (10, 30), (30, 60),
        ]

    @pytest.mark.asyncio
    async def test_counting_function_and_rank_priority(self, book, make_chef):
        book.register_function("Head", lambda: "head")
        book.register_function("A", lambda: "aaaa")
        book.register_function("B", lambda: "bbbb")
        rank = MagicMock(side_effect=lambda info: 100 if info.token == "B" else 1)

        result = await make_chef().cook(
            ["Head", "A", "B"],
            budget=2,
            count_tokens=lambda text: 1,
            rank_priority=rank,
            explain=True,
        )

        assert [p.decision for p in result.plates] == ["forced-include", "dropped", "included"]
        assert rank.call_count == 3


class TestOrders:
    """Test order normalization"""

    @pytest.mark.asyncio
    async def test_order_item_forms(self, book, make_chef):
        book.register_function(
            "List", lambda: [1, 2, 3],
            detail_profiles={"head": lambda v: v[:1], "tail": lambda v: v[-1:]},
        )
        chef = make_chef()

        result = await chef.cook(
            [
                "List",
                OrderItem("List", "head"),
                ("List", "tail"),
                {"token": "List", "detail": "tail"},
                {"token": "List"},
            ],
            explain=True,
        )

        assert [p.served_detail for p in result.plates] == ["full", "head", "tail", "tail", "full"]
        assert result.context == "[1,2,3]\n\n[1]\n\n[3]\n\n[3]\n\n[1,2,3]\n"

    @pytest.mark.asyncio
    async def test_invalid_order_item(self, make_chef):
        with pytest.raises(TypeError):
            await make_chef().cook([42])


class TestCookErrors:
    """Test that resolution errors abort the cook"""

    @pytest.mark.asyncio
    async def test_failing_cost_function_aborts(self, book, make_chef):
        def count_tokens(text):
            raise RuntimeError("cost oracle down")

        book.register_function("A", lambda: "alpha")

        with pytest.raises(RuntimeError, match="cost oracle down"):
            await make_chef().cook(["A"], budget=100, count_tokens=count_tokens)

    @pytest.mark.asyncio
    async def test_empty_rendering_priced_by_cost_function(self, book, make_chef):
        book.register_function("A", lambda: "")

        result = await make_chef().cook(["A"], count_tokens=lambda text: len(text) + 5, explain=True)

        assert result.plates[0].cost == 5
        assert result.total_tokens == 5

    @pytest.mark.asyncio
    async def test_unresolved_token_aborts(self, book, make_chef):
        book.register_function("A", lambda: "a")

        with pytest.raises(UnresolvedToken):
            await make_chef().cook(["A", "Missing"])

    @pytest.mark.asyncio
    async def test_contract_violation_aborts(self, book, make_chef):
        book.register_function("Needs", lambda v: v, ingredients=["seed.missing"])

        with pytest.raises(ContractViolation):
            await make_chef({"seed": {}}).cook(["Needs"], budget=100)

    @pytest.mark.asyncio
    async def test_cook_timeout(self, book, make_chef):
        async def hung():
            await asyncio.sleep(10)

        book.register_function("Hung", hung)

        with pytest.raises(asyncio.TimeoutError):
            await make_chef().cook(["Hung"], timeout=0.01)


class TestCookResult:
    """Test explained result serialization"""

    @pytest.mark.asyncio
    async def test_to_dict(self, hitl_chef, length_tokenizer):
        result = await hitl_chef.cook(
            ["SystemDirective"],
            budget=1000,
            count_tokens=length_tokenizer,
            explain=True,
        )

        data = result.to_dict()

        assert data["total_tokens"] == 180
        assert data["plates"][0]["decision"] == "forced-include"
        assert data["plates"][0]["lineage"] == [
            {"token": "SystemDirective", "provider_name": "SystemDirective", "deps": []},
        ]

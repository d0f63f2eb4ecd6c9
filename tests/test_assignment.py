"""End-to-end tests for assign_district against an in-memory directory."""

from collections.abc import Callable
from typing import Any

import pytest

from senkyoku.core.assignment import assign_district, parse_district
from senkyoku.core.district_table import StaticDistrictTable
from senkyoku.core.errors import DistrictLookupError, InputInvalid
from senkyoku.discord.messages import render_outcome
from senkyoku.models.district import DistrictCommand, OutcomeKind


class FailingTable:
    """District table whose backing store is down."""

    def __init__(self) -> None:
        self.calls = 0

    async def max_district(self, prefecture: str) -> int | None:
        self.calls += 1
        raise DistrictLookupError(prefecture, "database is locked")


@pytest.fixture
def table() -> StaticDistrictTable:
    return StaticDistrictTable()


def command(raw_input: str, *role_ids: str, member_id: str = "m1") -> DistrictCommand:
    return DistrictCommand(member_id=member_id, member_role_ids=role_ids, raw_input=raw_input)


class TestParseDistrict:
    def test_valid(self) -> None:
        assert parse_district("4区") == 4

    def test_zero_raises(self) -> None:
        with pytest.raises(InputInvalid):
            parse_district("0区")


class TestScenarios:
    async def test_a_first_assignment(
        self, make_gateway: Callable[..., Any], table: StaticDistrictTable
    ) -> None:
        """東京都 member with no district picks 3."""
        gateway = make_gateway()
        outcome = await assign_district(command("3", "100", "200"), gateway, table)

        assert outcome.kind is OutcomeKind.SUCCESS
        assert outcome.removed == ()
        assert gateway.writes == [("add", "m1", "303")]
        reply = render_outcome(outcome)
        assert "東京都" in reply
        assert "3区" in reply

    async def test_b_out_of_range(
        self, make_gateway: Callable[..., Any], table: StaticDistrictTable
    ) -> None:
        """鳥取県 has two districts; asking for 5 is refused without any writes."""
        gateway = make_gateway()
        outcome = await assign_district(command("5", "201", "301"), gateway, table)

        assert outcome.kind is OutcomeKind.OUT_OF_RANGE
        assert outcome.max_district == 2
        assert outcome.district == 5
        assert gateway.writes == []
        reply = render_outcome(outcome)
        assert "2" in reply
        assert "5" in reply

    async def test_c_no_prefecture(
        self, make_gateway: Callable[..., Any], table: StaticDistrictTable
    ) -> None:
        gateway = make_gateway()
        outcome = await assign_district(command("1", "100", "300"), gateway, table)

        assert outcome.kind is OutcomeKind.PREFECTURE_UNRESOLVED
        assert gateway.writes == []
        assert render_outcome(outcome) == "都道府県ロールが付与されていません。"

    async def test_d_kanji_input(
        self, make_gateway: Callable[..., Any], table: StaticDistrictTable
    ) -> None:
        kanji_gateway = make_gateway()
        ascii_gateway = make_gateway()
        kanji = await assign_district(command("一区", "200"), kanji_gateway, table)
        ascii_ = await assign_district(command("1", "200"), ascii_gateway, table)

        assert kanji == ascii_
        assert kanji.role_name == "1区"
        assert kanji_gateway.writes == ascii_gateway.writes == [("add", "m1", "301")]


class TestOutcomes:
    async def test_invalid_input_touches_nothing(
        self, make_gateway: Callable[..., Any], table: StaticDistrictTable
    ) -> None:
        gateway = make_gateway()
        for raw in ["", "abc", "0区"]:
            outcome = await assign_district(command(raw, "200"), gateway, table)
            assert outcome.kind is OutcomeKind.INPUT_INVALID
        assert gateway.calls == []

    async def test_oversized_number_is_invalid_input(
        self, make_gateway: Callable[..., Any], table: StaticDistrictTable
    ) -> None:
        """Discord allows 6000-character options; neither script may blow up."""
        gateway = make_gateway()
        for raw in ["1" * 6000, "一" * 6000]:
            outcome = await assign_district(command(raw, "200"), gateway, table)
            assert outcome.kind is OutcomeKind.INPUT_INVALID
        assert gateway.calls == []

    async def test_switch_district(
        self, make_gateway: Callable[..., Any], table: StaticDistrictTable
    ) -> None:
        gateway = make_gateway()
        outcome = await assign_district(command("2区", "200", "301"), gateway, table)

        assert outcome.ok
        assert gateway.writes == [("remove", "m1", "301"), ("add", "m1", "302")]
        assert outcome.removed == ("301",)

    async def test_stray_roles_cleaned_up(
        self, make_gateway: Callable[..., Any], table: StaticDistrictTable
    ) -> None:
        gateway = make_gateway()
        outcome = await assign_district(
            command("5", "200", "301", "302", "303"), gateway, table
        )
        assert outcome.ok
        removed = {call[2] for call in gateway.writes if call[0] == "remove"}
        assert removed == {"301", "302", "303"}
        assert gateway.writes[-1] == ("add", "m1", "305")

    async def test_lookup_failure(self, make_gateway: Callable[..., Any]) -> None:
        gateway = make_gateway()
        outcome = await assign_district(command("1", "200"), gateway, FailingTable())

        assert outcome.kind is OutcomeKind.LOOKUP_FAILED
        assert outcome.prefecture == "東京都"
        assert gateway.writes == []
        assert "東京都" in render_outcome(outcome)

    async def test_missing_table_entry_is_lookup_failure(
        self, make_gateway: Callable[..., Any]
    ) -> None:
        gateway = make_gateway()
        outcome = await assign_district(
            command("1", "200"), gateway, StaticDistrictTable({"鳥取県": 2})
        )
        assert outcome.kind is OutcomeKind.LOOKUP_FAILED

    async def test_target_role_missing(
        self, make_gateway: Callable[..., Any], table: StaticDistrictTable
    ) -> None:
        gateway = make_gateway()
        outcome = await assign_district(command("12", "200", "301"), gateway, table)

        assert outcome.kind is OutcomeKind.TARGET_ROLE_MISSING
        assert outcome.role_name == "12区"
        assert gateway.writes == []
        assert "12区" in render_outcome(outcome)

    async def test_directory_unavailable_fails_fast(
        self, make_gateway: Callable[..., Any], table: StaticDistrictTable
    ) -> None:
        gateway = make_gateway(fail_list=True)
        outcome = await assign_district(command("1", "200"), gateway, table)

        assert outcome.kind is OutcomeKind.DIRECTORY_UNAVAILABLE
        assert gateway.calls == [("list",)]

    async def test_add_failure_is_never_success(
        self, make_gateway: Callable[..., Any], table: StaticDistrictTable
    ) -> None:
        gateway = make_gateway(fail_add={"302"})
        outcome = await assign_district(command("2", "200", "301"), gateway, table)

        assert outcome.kind is OutcomeKind.WRITE_FAILED
        assert not outcome.ok
        assert outcome.removed == ("301",)
        assert render_outcome(outcome) == "エラー：ロールの付与に失敗しました。"

    async def test_removal_failure_still_succeeds(
        self, make_gateway: Callable[..., Any], table: StaticDistrictTable
    ) -> None:
        gateway = make_gateway(fail_remove={"301"})
        outcome = await assign_district(command("2", "200", "301"), gateway, table)

        assert outcome.ok
        assert outcome.failed_removals == ("301",)
        assert gateway.writes[-1] == ("add", "m1", "302")

    async def test_injected_prefecture_set(
        self, make_gateway: Callable[..., Any], table: StaticDistrictTable
    ) -> None:
        gateway = make_gateway()
        outcome = await assign_district(
            command("1", "200", "201"), gateway, table, prefectures={"鳥取県"}
        )
        assert outcome.prefecture == "鳥取県"

"""Reply text for /senkyoku outcomes.

Pure functions that build user-facing strings; no Discord API calls here.
"""

from __future__ import annotations

from senkyoku.models.district import AssignmentOutcome, OutcomeKind

COMMAND_NAME = "senkyoku"
COMMAND_DESCRIPTION = "選挙区を選択してロールを付与します"
OPTION_NAME = "選挙区"
OPTION_DESCRIPTION = "例：1区の場合「1」または「1区」を入力"

MSG_INPUT_INVALID = "有効な数字が見つかりませんでした。「1」「1区」「一区」のように入力してください。"
MSG_NO_PREFECTURE = "都道府県ロールが付与されていません。"
MSG_LOOKUP_FAILED = "エラー：データベースから{prefecture}の情報を取得できませんでした。"
MSG_OUT_OF_RANGE = "{prefecture}には{max_district}区までしか存在しません（{district}区を選択）。"
MSG_ROLE_MISSING = "エラー：{role_name}のロールが見つかりませんでした。"
MSG_DIRECTORY_UNAVAILABLE = "エラー：サーバー情報の取得に失敗しました。"
MSG_WRITE_FAILED = "エラー：ロールの付与に失敗しました。"
MSG_SUCCESS = "{prefecture}の{role_name}ロールを付与しました。"
MSG_UNEXPECTED = "エラー：予期しない問題が発生しました。しばらくしてから再度お試しください。"
MSG_GUILD_ONLY = "このコマンドはサーバー内でのみ使用できます。"

_STATIC_MESSAGES: dict[OutcomeKind, str] = {
    OutcomeKind.INPUT_INVALID: MSG_INPUT_INVALID,
    OutcomeKind.PREFECTURE_UNRESOLVED: MSG_NO_PREFECTURE,
    OutcomeKind.DIRECTORY_UNAVAILABLE: MSG_DIRECTORY_UNAVAILABLE,
    OutcomeKind.WRITE_FAILED: MSG_WRITE_FAILED,
}


def render_outcome(outcome: AssignmentOutcome) -> str:
    """Render an assignment outcome as a single reply line."""
    kind = outcome.kind
    if kind is OutcomeKind.SUCCESS:
        return MSG_SUCCESS.format(prefecture=outcome.prefecture, role_name=outcome.role_name)
    if kind is OutcomeKind.OUT_OF_RANGE:
        return MSG_OUT_OF_RANGE.format(
            prefecture=outcome.prefecture,
            max_district=outcome.max_district,
            district=outcome.district,
        )
    if kind is OutcomeKind.LOOKUP_FAILED:
        return MSG_LOOKUP_FAILED.format(prefecture=outcome.prefecture)
    if kind is OutcomeKind.TARGET_ROLE_MISSING:
        return MSG_ROLE_MISSING.format(role_name=outcome.role_name)
    return _STATIC_MESSAGES.get(kind, MSG_UNEXPECTED)

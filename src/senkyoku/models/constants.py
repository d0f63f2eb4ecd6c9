"""Shared constants for senkyoku models.

Placed here so both the core engine and the database seeding code can
import them without creating a layer violation.
"""

from __future__ import annotations

from types import MappingProxyType

# Suffix glyph that turns a district index into a role name ("3" -> "3区").
DISTRICT_SUFFIX = "区"

# The 47 prefectures in JIS X 0401 order. Role names must match exactly.
PREFECTURES: tuple[str, ...] = (
    "北海道",
    "青森県",
    "岩手県",
    "宮城県",
    "秋田県",
    "山形県",
    "福島県",
    "茨城県",
    "栃木県",
    "群馬県",
    "埼玉県",
    "千葉県",
    "東京都",
    "神奈川県",
    "新潟県",
    "富山県",
    "石川県",
    "福井県",
    "山梨県",
    "長野県",
    "岐阜県",
    "静岡県",
    "愛知県",
    "三重県",
    "滋賀県",
    "京都府",
    "大阪府",
    "兵庫県",
    "奈良県",
    "和歌山県",
    "鳥取県",
    "島根県",
    "岡山県",
    "広島県",
    "山口県",
    "徳島県",
    "香川県",
    "愛媛県",
    "高知県",
    "福岡県",
    "佐賀県",
    "長崎県",
    "熊本県",
    "大分県",
    "宮崎県",
    "鹿児島県",
    "沖縄県",
)

# Single-seat House of Representatives districts per prefecture
# (2022 apportionment, 289 in total).
DISTRICT_COUNTS: MappingProxyType[str, int] = MappingProxyType(
    {
        "北海道": 12,
        "青森県": 3,
        "岩手県": 3,
        "宮城県": 5,
        "秋田県": 3,
        "山形県": 3,
        "福島県": 4,
        "茨城県": 7,
        "栃木県": 5,
        "群馬県": 5,
        "埼玉県": 16,
        "千葉県": 14,
        "東京都": 30,
        "神奈川県": 20,
        "新潟県": 5,
        "富山県": 3,
        "石川県": 3,
        "福井県": 2,
        "山梨県": 2,
        "長野県": 5,
        "岐阜県": 5,
        "静岡県": 8,
        "愛知県": 16,
        "三重県": 4,
        "滋賀県": 3,
        "京都府": 6,
        "大阪府": 19,
        "兵庫県": 12,
        "奈良県": 3,
        "和歌山県": 2,
        "鳥取県": 2,
        "島根県": 2,
        "岡山県": 4,
        "広島県": 6,
        "山口県": 3,
        "徳島県": 2,
        "香川県": 3,
        "愛媛県": 3,
        "高知県": 2,
        "福岡県": 11,
        "佐賀県": 2,
        "長崎県": 3,
        "熊本県": 4,
        "大分県": 3,
        "宮崎県": 3,
        "鹿児島県": 4,
        "沖縄県": 4,
    }
)

KNOWN_PREFECTURES: frozenset[str] = frozenset(PREFECTURES)

"""
Prefecture value object: the closed set of the 47 Japanese prefectures.
"""

from dataclasses import dataclass

from plus_shipping.utils.error_handler import ValidationException

VALID_PREFECTURES = (
    "北海道",
    "青森県", "岩手県", "宮城県", "秋田県", "山形県", "福島県",
    "茨城県", "栃木県", "群馬県", "埼玉県", "千葉県", "東京都", "神奈川県",
    "新潟県", "富山県", "石川県", "福井県", "山梨県", "長野県",
    "岐阜県", "静岡県", "愛知県", "三重県",
    "滋賀県", "京都府", "大阪府", "兵庫県", "奈良県", "和歌山県",
    "鳥取県", "島根県", "岡山県", "広島県", "山口県",
    "徳島県", "香川県", "愛媛県", "高知県",
    "福岡県", "佐賀県", "長崎県", "熊本県", "大分県", "宮崎県", "鹿児島県",
    "沖縄県",
)  # fmt: skip


@dataclass(frozen=True)
class Prefecture:
    """
    Immutable prefecture name, validated against the 47 prefectures.

    Classification follows the administrative suffix: 都 (to), 道 (do),
    府 (fu) and 県 (ken).
    """

    value: str

    def __post_init__(self) -> None:
        raw = self.value
        if not isinstance(raw, str) or not raw.strip():
            raise ValidationException("Invalid prefecture: empty string", field="prefecture", invalid_value=raw)

        name = raw.strip()
        if name not in VALID_PREFECTURES:
            raise ValidationException(
                f"Invalid prefecture: {name} is not a valid Japanese prefecture",
                field="prefecture",
                invalid_value=raw,
            )

        object.__setattr__(self, "value", name)

    @classmethod
    def from_value(cls, raw: str) -> "Prefecture":
        return cls(raw)

    @property
    def is_to(self) -> bool:
        return self.value.endswith("都")

    @property
    def is_do(self) -> bool:
        return self.value.endswith("道")

    @property
    def is_fu(self) -> bool:
        return self.value.endswith("府")

    @property
    def is_ken(self) -> bool:
        return self.value.endswith("県")

    def __str__(self) -> str:
        return self.value

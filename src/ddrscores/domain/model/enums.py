"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class Provider(StrEnum):
    SANBAI = "sanbai"
    SKILL_ATTACK = "skill_attack"


class PlayStyle(StrEnum):
    SINGLE = "SP"
    DOUBLE = "DP"


class Chart(IntEnum):
    """Difficulty slot of a song; the value is the index into every 9-slot array.

    Singles come first (beginner through challenge), doubles follow. Doubles have
    no beginner chart.
    """

    GSP = 0
    BSP = 1
    DSP = 2
    ESP = 3
    CSP = 4
    BDP = 5
    DDP = 6
    EDP = 7
    CDP = 8

    @property
    def index(self) -> int:
        return int(self)

    @property
    def play_style(self) -> PlayStyle:
        return PlayStyle.SINGLE if self <= Chart.CSP else PlayStyle.DOUBLE

    @property
    def is_single(self) -> bool:
        return self.play_style is PlayStyle.SINGLE

    @property
    def is_challenge(self) -> bool:
        return self in (Chart.CSP, Chart.CDP)

    @classmethod
    def from_index(cls, index: int) -> Chart | None:
        if 0 <= index < CHART_COUNT:
            return cls(index)
        return None

    @classmethod
    def from_site_difficulty(cls, style: int, difficulty: int) -> Chart:
        """Map a ``(SP_or_DP, difficulty)`` pair as reported by Sanbai onto a slot.

        Singles use difficulties 0-4 (beginner..challenge); doubles use 1-4.
        """

        if style == 0 and 0 <= difficulty <= 4:  # noqa: PLR2004
            return cls(difficulty)
        if style == 1 and 1 <= difficulty <= 4:  # noqa: PLR2004
            return cls(Chart.CSP + difficulty)
        raise ValueError(f"Unsupported chart: style={style} difficulty={difficulty}")


CHART_COUNT = len(Chart)
SINGLE_CHARTS = tuple(chart for chart in Chart if chart.is_single)
DOUBLE_CHARTS = tuple(chart for chart in Chart if not chart.is_single)


class UnknownLampError(ValueError):
    """Raised when a site reports a clear-lamp code we do not know how to order."""

    def __init__(self, provider: Provider, code: int) -> None:
        super().__init__(f"Unrecognized {provider} lamp code: {code}")
        self.provider = provider
        self.code = code


class LampType(IntEnum):
    """Achievement rank shared by both sites, ordered from worst to best."""

    FAIL = 0
    CLEAR = 1
    LIFE4 = 2
    GOOD_FULL_COMBO = 3
    GREAT_FULL_COMBO = 4
    PERFECT_FULL_COMBO = 5
    MARVELOUS_FULL_COMBO = 6

    @classmethod
    def from_sanbai(cls, code: int) -> LampType:
        lamp = _SANBAI_LAMPS.get(code)
        if lamp is None:
            raise UnknownLampError(Provider.SANBAI, code)
        return lamp

    @classmethod
    def from_skill_attack(cls, code: int) -> LampType:
        lamp = _SKILL_ATTACK_LAMPS.get(code)
        if lamp is None:
            raise UnknownLampError(Provider.SKILL_ATTACK, code)
        return lamp


_SANBAI_LAMPS: dict[int, LampType] = {
    0: LampType.FAIL,
    1: LampType.CLEAR,
    2: LampType.LIFE4,
    3: LampType.GOOD_FULL_COMBO,
    4: LampType.GREAT_FULL_COMBO,
    5: LampType.PERFECT_FULL_COMBO,
    6: LampType.MARVELOUS_FULL_COMBO,
}

# Skill Attack only records full combos; a played chart without one could be a
# fail, a clear or a LIFE4 clear, so it maps to the lowest of those.
_SKILL_ATTACK_LAMPS: dict[int, LampType] = {
    0: LampType.FAIL,
    1: LampType.GREAT_FULL_COMBO,
    2: LampType.PERFECT_FULL_COMBO,
    3: LampType.MARVELOUS_FULL_COMBO,
    4: LampType.GOOD_FULL_COMBO,
}


class DDRVersion(IntEnum):
    UNKNOWN = 0
    DDR_1ST_MIX = 1
    DDR_2ND_MIX = 2
    DDR_3RD_MIX = 3
    DDR_4TH_MIX = 4
    DDR_5TH_MIX = 5
    DDR_MAX = 6
    DDR_MAX2 = 7
    DDR_EXTREME = 8
    DDR_SUPERNOVA = 9
    DDR_SUPERNOVA2 = 10
    DDR_X = 11
    DDR_X2 = 12
    DDR_X3 = 13
    DDR_2013 = 14
    DDR_2014 = 15
    DDR_A = 16
    DDR_A20 = 17
    DDR_A20_PLUS = 18

    @classmethod
    def from_number(cls, value: int | None) -> DDRVersion:
        if value is None:
            return cls.UNKNOWN
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    @property
    def display_name(self) -> str:
        return _VERSION_NAMES[self]


_VERSION_NAMES: dict[DDRVersion, str] = {
    DDRVersion.UNKNOWN: "Unknown Version",
    DDRVersion.DDR_1ST_MIX: "Dance Dance Revolution 1stMIX",
    DDRVersion.DDR_2ND_MIX: "Dance Dance Revolution 2ndMIX",
    DDRVersion.DDR_3RD_MIX: "Dance Dance Revolution 3rdMIX",
    DDRVersion.DDR_4TH_MIX: "Dance Dance Revolution 4thMIX",
    DDRVersion.DDR_5TH_MIX: "Dance Dance Revolution 5thMIX",
    DDRVersion.DDR_MAX: "Dance Dance Revolution MAX",
    DDRVersion.DDR_MAX2: "Dance Dance Revolution MAX2",
    DDRVersion.DDR_EXTREME: "Dance Dance Revolution EXTREME",
    DDRVersion.DDR_SUPERNOVA: "Dance Dance Revolution SuperNOVA",
    DDRVersion.DDR_SUPERNOVA2: "Dance Dance Revolution SuperNOVA2",
    DDRVersion.DDR_X: "Dance Dance Revolution X",
    DDRVersion.DDR_X2: "Dance Dance Revolution X2",
    DDRVersion.DDR_X3: "Dance Dance Revolution X3 VS 2ndMIX",
    DDRVersion.DDR_2013: "Dance Dance Revolution 2013",
    DDRVersion.DDR_2014: "Dance Dance Revolution 2014",
    DDRVersion.DDR_A: "Dance Dance Revolution A",
    DDRVersion.DDR_A20: "Dance Dance Revolution A20",
    DDRVersion.DDR_A20_PLUS: "Dance Dance Revolution A20 PLUS",
}

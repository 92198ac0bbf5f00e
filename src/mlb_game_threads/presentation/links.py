from types import MappingProxyType

MLB_HOME = "https://www.mlb.com/"
_ICON_BASE = "https://midfield.mlbstatic.com/v1"

DEFAULT_TEAM_COLOR = 0xD3D3D3

TEAM_COLORS = MappingProxyType(
    {
        108: 0xBA0021,  # LAA
        109: 0xA71930,  # AZ
        110: 0xDF4601,  # BAL
        111: 0xBD3039,  # BOS
        112: 0x0E3386,  # CHC
        113: 0xC6011F,  # CIN
        114: 0x002B5C,  # CLE
        115: 0x33006F,  # COL
        116: 0x0C2C56,  # DET
        117: 0x002D62,  # HOU
        118: 0x004687,  # KC
        119: 0x005A9C,  # LAD
        120: 0xAB0003,  # WSH
        121: 0x002D72,  # NYM
        133: 0x003831,  # OAK
        134: 0xFDB827,  # PIT
        135: 0x2F241D,  # SD
        136: 0x005C5C,  # SEA
        137: 0xFD5B1E,  # SF
        138: 0xC41E3A,  # STL
        139: 0x092C5C,  # TB
        140: 0x003278,  # TEX
        141: 0x134A8E,  # TOR
        142: 0x091F40,  # MIN
        143: 0xE81828,  # PHI
        144: 0x13274F,  # ATL
        145: 0xFFFFFF,  # CWS
        146: 0x00A3E0,  # MIA
        147: 0x132448,  # NYY
        158: 0x12284B,  # MIL
    }
)


def team_color(team_id: int | None) -> int:
    if team_id is None:
        return DEFAULT_TEAM_COLOR
    return TEAM_COLORS.get(team_id, DEFAULT_TEAM_COLOR)


def gameday_link(game_pk: int) -> str:
    return f"https://www.mlb.com/gameday/{game_pk}/"


def player_link(player_id: int) -> str:
    return f"https://www.mlb.com/player/{player_id}"


def video_link(slug: str) -> str:
    return f"https://www.mlb.com/video/{slug}"


def matchup_icon(home_team_id: int, away_team_id: int, size: int = 100) -> str:
    return f"{_ICON_BASE}/teams-matchup/{away_team_id}-{home_team_id}/ar_1:1/w_{size}"


def sport_icon(sport_id: int = 1, size: int = 100) -> str:
    return f"{_ICON_BASE}/sport/{sport_id}/spots/{size}"


def player_icon(player_id: int, size: int = 100) -> str:
    return f"{_ICON_BASE}/people/{player_id}/spots/{size}"

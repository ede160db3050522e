"""Constants for the BloodSheet settlement engine."""

HOLES_PER_ROUND = 18
HOLES_PER_NINE = 9

ROUND_HOLES = tuple(range(1, HOLES_PER_ROUND + 1))
FRONT_NINE = tuple(range(1, HOLES_PER_NINE + 1))
BACK_NINE = tuple(range(HOLES_PER_NINE + 1, HOLES_PER_ROUND + 1))

VALID_PARS = (3, 4, 5)

TEAM_A = 'A'
TEAM_B = 'B'
TEAMS = (TEAM_A, TEAM_B)

FORMAT_NASSAU = 'nassau'
FORMAT_SKINS = 'skins'
FORMATS = (FORMAT_NASSAU, FORMAT_SKINS)

TEAM_MODE_SINGLES = '1v1'
TEAM_MODE_FOURBALL = '2v2'

# Players required per team for each Nassau team mode
TEAM_MODE_SIZES = {
    TEAM_MODE_SINGLES: 1,
    TEAM_MODE_FOURBALL: 2,
}

DEFAULT_TRASH_VALUE = 5
DEFAULT_CONTEST_POT = 5
DEFAULT_AUTO_PRESS_DEFICIT = 2

# Bonus skin units
PIN_BONUS_UNITS = 1
BIRDIE_BONUS_UNITS = 1
EAGLE_BONUS_UNITS = 2

# Ledger labels
LABEL_FRONT_NINE = 'Front 9 (Base)'
LABEL_BACK_NINE = 'Back 9 (Base)'
LABEL_OVERALL = 'Overall (18 Holes)'
LABEL_PRESS = 'Press'
LABEL_SKIN = 'Skin'
LABEL_BONUS_SKIN = 'Bonus Skin'
LABEL_CARRYOVER = 'Carryover'
LABEL_SKINS_POT = 'Skins Pot'
LABEL_GREENIES = 'Greenies'
LABEL_SANDIES = 'Sandies'
LABEL_SNAKE = 'Snake'

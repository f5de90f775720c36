"""
Dice Poker - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. All classes are immutable (frozen dataclasses) so a snapshot
read from the Ledger can never be mutated locally.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum, IntEnum, auto
from typing import Sequence


EMPTY_ADDRESS = "0x0000000000000000000000000000000000000000"
DICE_PER_HAND = 5
FIRST_TRANCHE = range(0, 3)
LAST_TRANCHE = range(3, 5)
MIN_FACE = 1
MAX_FACE = 6


class GamePhase(IntEnum):
    """Phases of a session. Values are the Ledger's raw phase index."""
    JOINING = 0
    P1_BET_1 = 1
    P2_BET_OR_CALL_1 = 2
    P1_RAISE_OR_CALL_1 = 3
    P2_RAISE_OR_CALL_1 = 4
    P1_ROLL_FIRST = 5
    P2_ROLL_FIRST = 6
    P1_BET_2 = 7
    P2_BET_OR_CALL_2 = 8
    P1_RAISE_OR_CALL_2 = 9
    P2_RAISE_OR_CALL_2 = 10
    P1_ROLL_LAST = 11
    P2_ROLL_LAST = 12
    DETERMINE_WINNER = 13
    TIE = 14
    GAME_ENDED = 15

    @property
    def label(self) -> str:
        """Human-readable phase name, e.g. ``P1RaiseOrCall1``."""
        return "".join(part.capitalize() for part in self.name.split("_"))


class Turn(Enum):
    """Whose move the current phase waits on."""
    PLAYER0 = 0
    PLAYER1 = 1
    NONE = None

    @property
    def index(self) -> int | None:
        return self.value


class ActionKind(Enum):
    """Everything a participant can pick from the menu."""
    JOIN = auto()
    BET = auto()
    CALL = auto()
    FOLD = auto()
    REVEAL_FIRST = auto()
    REVEAL_LAST = auto()
    RESET = auto()
    SHOW_HANDS = auto()
    EXIT = auto()

    @property
    def submits(self) -> bool:
        """True when choosing this action sends a request to the Ledger."""
        return self not in (ActionKind.SHOW_HANDS, ActionKind.EXIT)


def same_address(a: str, b: str) -> bool:
    """Participant identifiers compare case-insensitively."""
    return a.lower() == b.lower()


def as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC so Ledger and local times compare."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


@dataclass(frozen=True)
class PlayerSlot:
    """
    One of the two player positions in a session.

    Attributes:
        address: Participant identifier, or EMPTY_ADDRESS when unfilled
        bet: Total amount committed so far, in Ledger base units
        has_rolled_first: Whether faces 0-2 have been revealed
        has_rolled_last: Whether faces 3-4 have been revealed
    """
    address: str = EMPTY_ADDRESS
    bet: int = 0
    has_rolled_first: bool = False
    has_rolled_last: bool = False

    @property
    def is_empty(self) -> bool:
        return same_address(self.address, EMPTY_ADDRESS)


@dataclass(frozen=True)
class DiceHand:
    """
    Five dice faces held by one player.

    Unrolled faces are stored by the Ledger as 0; they are only ever
    exposed through DiceRevealMasker, which hides them.
    """
    faces: tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.faces) != DICE_PER_HAND:
            raise ValueError(
                f"A hand must have exactly {DICE_PER_HAND} dice, got {len(self.faces)}."
            )

    def __len__(self) -> int:
        return len(self.faces)

    def __getitem__(self, index: int) -> int:
        return self.faces[index]

    @property
    def first_tranche(self) -> tuple[int, ...]:
        return tuple(self.faces[i] for i in FIRST_TRANCHE)

    @property
    def last_tranche(self) -> tuple[int, ...]:
        return tuple(self.faces[i] for i in LAST_TRANCHE)

    @classmethod
    def from_sequence(cls, faces: Sequence[int]) -> "DiceHand":
        """Create a DiceHand from any sequence type."""
        return cls(faces=tuple(faces))


@dataclass(frozen=True)
class GameSession:
    """
    Full observable state of one game, rebuilt from every Ledger read.

    Attributes:
        phase: Current GamePhase
        players: The two player slots
        hands: Each player's dice, indexed like players
        current_bet_level: Amount a player must match to call
        last_terminal_at: When the session entered GameEnded (Ledger clock)
    """
    phase: GamePhase
    players: tuple[PlayerSlot, PlayerSlot]
    hands: tuple[DiceHand, DiceHand]
    current_bet_level: int = 0
    last_terminal_at: datetime | None = None

    def index_of(self, address: str) -> int | None:
        """Slot index held by ``address``, or None if it holds no slot."""
        if same_address(address, EMPTY_ADDRESS):
            return None
        for i, slot in enumerate(self.players):
            if same_address(slot.address, address):
                return i
        return None

    @property
    def has_open_slot(self) -> bool:
        return any(slot.is_empty for slot in self.players)

    @property
    def pot(self) -> int:
        return sum(slot.bet for slot in self.players)

"""
Dice Poker Game Engine.

Pure Python game logic; nothing here performs I/O.
Handles phase/turn resolution, menu composition, dice masking and the
showdown.
"""

from src.engine.base import (
    ActionKind,
    DiceHand,
    GamePhase,
    GameSession,
    PlayerSlot,
    Turn,
)
from src.engine.errors import (
    DicePokerError,
    EvaluatorPrecondition,
    InvalidSelection,
    LedgerUnavailable,
    MalformedSnapshot,
    NothingToCall,
    Rejected,
)
from src.engine.menu import ActionMenuBuilder, MenuOption, amount_to_call, select_option
from src.engine.reveal import DiceRevealMasker, format_view
from src.engine.showdown import Outcome, WinnerEvaluator
from src.engine.snapshot import load_session
from src.engine.turns import TurnResolver

__all__ = [
    # Data Classes
    "DiceHand",
    "GameSession",
    "MenuOption",
    "Outcome",
    "PlayerSlot",
    # Enums
    "ActionKind",
    "GamePhase",
    "Turn",
    # Errors
    "DicePokerError",
    "EvaluatorPrecondition",
    "InvalidSelection",
    "LedgerUnavailable",
    "MalformedSnapshot",
    "NothingToCall",
    "Rejected",
    # Components
    "ActionMenuBuilder",
    "DiceRevealMasker",
    "TurnResolver",
    "WinnerEvaluator",
    "amount_to_call",
    "format_view",
    "load_session",
    "select_option",
]

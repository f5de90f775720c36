"""
Dice Poker - Winner Evaluator

Highest total of five dice wins; equal totals split the pot.
"""

from dataclasses import dataclass
from typing import Sequence

from src.engine.base import DICE_PER_HAND, MAX_FACE, MIN_FACE, DiceHand, GameSession
from src.engine.errors import EvaluatorPrecondition


@dataclass(frozen=True)
class Outcome:
    """
    Result of comparing two fully revealed hands.

    Attributes:
        winner: 0 or 1, or None for a tie
        sums: Total of each hand, indexed like the players
    """
    winner: int | None
    sums: tuple[int, int]

    @property
    def is_tie(self) -> bool:
        return self.winner is None

    def __str__(self) -> str:
        if self.is_tie:
            return f"Tie ({self.sums[0]} - {self.sums[1]}), pot split"
        return f"Winner: P{self.winner + 1} ({self.sums[0]} - {self.sums[1]})"


class WinnerEvaluator:
    """Stateless sum-based showdown."""

    @classmethod
    def evaluate(
        cls,
        hand0: DiceHand | Sequence[int],
        hand1: DiceHand | Sequence[int],
    ) -> Outcome:
        """
        Compare two complete hands.

        Raises:
            EvaluatorPrecondition: If a hand is not five faces in 1-6, which
                means it was not fully revealed yet
        """
        faces0 = cls._faces(hand0)
        faces1 = cls._faces(hand1)
        sum0, sum1 = sum(faces0), sum(faces1)

        if sum0 > sum1:
            winner = 0
        elif sum1 > sum0:
            winner = 1
        else:
            winner = None
        return Outcome(winner=winner, sums=(sum0, sum1))

    @classmethod
    def evaluate_session(cls, session: GameSession) -> Outcome:
        """Evaluate a session whose players have both revealed every tranche."""
        for i, slot in enumerate(session.players):
            if not (slot.has_rolled_first and slot.has_rolled_last):
                raise EvaluatorPrecondition(f"Player {i + 1} has not revealed all dice.")
        return cls.evaluate(session.hands[0], session.hands[1])

    @staticmethod
    def _faces(hand: DiceHand | Sequence[int]) -> tuple[int, ...]:
        faces = hand.faces if isinstance(hand, DiceHand) else tuple(hand)
        if len(faces) != DICE_PER_HAND or not all(MIN_FACE <= f <= MAX_FACE for f in faces):
            raise EvaluatorPrecondition(f"Hand {faces} is not fully revealed.")
        return faces

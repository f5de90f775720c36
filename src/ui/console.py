"""Console participant — session header, numbered menu and amount entry."""

from __future__ import annotations

from typing import Callable, Sequence

from src.engine.base import GameSession
from src.engine.menu import MenuOption
from src.engine.reveal import format_view
from src.engine.showdown import Outcome
from src.engine.validators import format_amount


class ConsoleParticipant:
    """Talks to the local player over stdin/stdout."""

    def __init__(
        self,
        *,
        amount_decimals: int = 18,
        currency_symbol: str = "ETH",
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        self.amount_decimals = amount_decimals
        self.currency_symbol = currency_symbol
        self._input = input_fn
        self._output = output_fn

    def _money(self, units: int) -> str:
        return f"{format_amount(units, self.amount_decimals)} {self.currency_symbol}"

    def show_session(
        self,
        session: GameSession,
        views: Sequence[Sequence[int | None]],
        viewer_index: int | None,
    ) -> None:
        p1, p2 = session.players
        seat = f"  (you are P{viewer_index + 1})" if viewer_index is not None else ""
        self._output(f"\n=== {session.phase.label} ===")
        self._output(f"Players: P1={p1.address}  P2={p2.address}{seat}")
        self._output(
            f"Bets:    P1={self._money(p1.bet)}  P2={self._money(p2.bet)}  "
            f"(to match: {self._money(session.current_bet_level)}, pot: {self._money(session.pot)})"
        )
        self._output(f"Dice:    P1={format_view(views[0])}  P2={format_view(views[1])}")

    def choose(self, menu: Sequence[MenuOption]) -> str:
        self._output("\nOptions:")
        for i, option in enumerate(menu, start=1):
            self._output(f"  {i}) {option.label}")
        return self._input("Choice: ")

    def ask_amount(self, prompt: str) -> str:
        return self._input(prompt)

    def show_hands(self, views: Sequence[Sequence[int | None]]) -> None:
        self._output(f"P1 Dice: {format_view(views[0])}")
        self._output(f"P2 Dice: {format_view(views[1])}")

    def show_outcome(self, session: GameSession, outcome: Outcome) -> None:
        self._output("\nFinal Hands:")
        for i, hand in enumerate(session.hands):
            faces = ", ".join(str(face) for face in hand.faces)
            self._output(f" P{i + 1}: {faces}  (sum={outcome.sums[i]})")
        self._output(str(outcome))

    def notify(self, message: str) -> None:
        self._output(message)

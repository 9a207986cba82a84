"""
Interactive Reader

Prompts for one entry at a time and yields RawEntry records:

    amount: 1200          (or "=35000" to record a running total)
    account: wal          (any unambiguous prefix of an account name)
    title: lunch          (transactions only)
    shop: soba-ya
    category: food

An empty amount, or end of input, finishes the session. Ctrl-C abandons
the entry being typed and starts over at the amount prompt.
"""

import sys
from typing import Callable, Iterator, Optional, TextIO

from kakeibo.errors import LedgerError
from kakeibo.models.ledger import RawEntry

try:
    import readline
except ImportError:  # not available on every platform
    readline = None


class InvalidAmountError(ValueError):
    """An amount or total that is not an integer."""


class Reader:
    """
    Reads entries from the terminal.

    Account, title and shop lines stay in the readline history so they
    can be recalled with the arrow keys; amount and category lines don't.
    """

    def __init__(
        self,
        prompt: Optional[Callable[[str], str]] = None,
        output: Optional[TextIO] = None,
        total_marker: str = "=",
        ask_date: bool = False,
    ):
        self._prompt = prompt or input
        self._output = output or sys.stdout
        self._history = readline is not None and prompt is None
        self._total_marker = total_marker
        self._ask_date = ask_date

    def _ask(self, label: str, history: bool = False) -> str:
        before = readline.get_current_history_length() if self._history else 0
        line = self._prompt(f"{label}: ")
        if not history and self._history:
            # input() skips a line that repeats the previous one
            length = readline.get_current_history_length()
            if length > before:
                readline.remove_history_item(length - 1)
        return line

    @staticmethod
    def _parse_int(text: str) -> int:
        try:
            return int(text.strip().replace(",", ""))
        except ValueError:
            raise InvalidAmountError(f"Not a number: {text.strip()}") from None

    def read_one(self) -> Optional[RawEntry]:
        """
        Prompt for a single entry.

        Returns None when the user finishes the session.

        Raises:
            KeyboardInterrupt: If the user abandons the entry
            InvalidAmountError: If the amount is not a number
        """
        try:
            amount = self._ask("amount")
        except EOFError:
            return None
        if not amount or not amount.strip():
            return None

        fields = {}
        amount = amount.lstrip()
        if amount.startswith(self._total_marker):
            fields["total"] = self._parse_int(amount[len(self._total_marker):])
        else:
            fields["amount"] = self._parse_int(amount)

        if self._ask_date:
            fields["date"] = self._ask("date", history=True)
        fields["account"] = self._ask("account", history=True)

        if "amount" in fields:
            fields["title"] = self._ask("title", history=True)
            fields["shop"] = self._ask("shop", history=True)
            fields["category"] = self._ask("category")

        return RawEntry(**fields)

    def read(self) -> Iterator[RawEntry]:
        """
        Yield entries until the user finishes the session.

        Interrupts and bad numbers only restart the prompt cycle.
        """
        while True:
            try:
                entry = self.read_one()
            except KeyboardInterrupt:
                print(file=self._output)
                continue
            except EOFError:
                # end of input in the middle of an entry
                print(file=self._output)
                return
            except InvalidAmountError as e:
                print(e, file=self._output)
                continue

            if entry is None:
                return
            yield entry

    def report_error(self, error: LedgerError) -> None:
        """Show why an entry was not filed."""
        print(error, file=self._output)

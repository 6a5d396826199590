"""Console prompter for the capability wizard."""

import sys
from typing import Any, Callable, Optional, TextIO

from .capability_wizard import CONFIRM, LIST, Prompter, Question

YES = {"y", "yes"}
NO = {"n", "no"}


class ConsolePrompter(Prompter):
    """Asks wizard questions on a terminal, re-asking until the answer is valid."""

    def __init__(self, input_func: Callable[[str], str] = input, output: Optional[TextIO] = None):
        self.input_func = input_func
        self.output = output or sys.stdout

    def _say(self, message: str) -> None:
        print(message, file=self.output)

    def ask(self, question: Question) -> Any:
        if question.kind == CONFIRM:
            return self._confirm(question)
        if question.kind == LIST:
            return self._choose(question)
        return self._input(question)

    def _input(self, question: Question) -> str:
        while True:
            answer = self.input_func(question.message).strip()
            result = question.validate(answer)
            if result is True:
                return answer
            self._say(f">> {result}")

    def _confirm(self, question: Question) -> bool:
        while True:
            answer = self.input_func(f"{question.message} (Y/n) ").strip().lower()
            if not answer or answer in YES:
                return True
            if answer in NO:
                return False
            self._say(">> Please answer y or n")

    def _choose(self, question: Question) -> str:
        self._say(question.message)
        for number, choice in enumerate(question.choices, start=1):
            self._say(f"  {number}) {choice}")
        while True:
            answer = self.input_func(f"Answer [1-{len(question.choices)}]: ").strip()
            if answer.isdigit() and 1 <= int(answer) <= len(question.choices):
                return question.choices[int(answer) - 1]
            for choice in question.choices:
                if answer.lower() == choice.lower():
                    return choice
            self._say(">> Please choose one of the listed options")

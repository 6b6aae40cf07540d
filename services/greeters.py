"""
Greeters for each supported language and the service that picks one.

A greeter is matched by its exact language tag (e.g. "zh"). When no greeter
matches the requested language the service falls back to a plain English
greeting.
"""

from __future__ import annotations

from typing import Optional


class Greeter:
    language: str = ""

    def greet(self, name: str) -> str:
        raise NotImplementedError


class EnglishGreeter(Greeter):
    language = "en"

    def greet(self, name: str) -> str:
        return f"Hello, {name}!"


class ChineseGreeter(Greeter):
    language = "zh"

    def __init__(self, name_first: bool = True):
        self.name_first = name_first

    def greet(self, name: str) -> str:
        if not self.name_first:
            return f"你好，{name}！"
        return f"{name}，你好！"


class FrenchGreeter(Greeter):
    language = "fr"

    def __init__(self, name_first: bool = True):
        self.name_first = name_first

    def greet(self, name: str) -> str:
        if not self.name_first:
            return f"Bonjour，{name}！"
        return f"{name}, Bonjour"


class GreetingService:
    """Dispatches a greeting to the greeter registered for a language."""

    def __init__(self, greeters: Optional[list[Greeter]] = None):
        self._greeters: list[Greeter] = list(greeters or [])

    def register(self, greeter: Greeter) -> None:
        self._greeters.append(greeter)

    @property
    def languages(self) -> list[str]:
        return [g.language for g in self._greeters]

    def find(self, language: Optional[str]) -> Optional[Greeter]:
        for greeter in self._greeters:
            if greeter.language == language:
                return greeter
        return None

    def greet(self, language: Optional[str], name: str) -> str:
        greeter = self.find(language)
        if greeter is None:
            return f"Hello, {name}!"
        return greeter.greet(name)


def build_greeting_service(*, zh_name_first: bool = False, fr_name_first: bool = True) -> GreetingService:
    service = GreetingService()
    service.register(EnglishGreeter())
    service.register(ChineseGreeter(name_first=zh_name_first))
    service.register(FrenchGreeter(name_first=fr_name_first))
    return service

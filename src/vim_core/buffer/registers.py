"""Register storage and clipboard integration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from vim_core.runtime import telemetry

from .sync import ClipboardService


class Granularity(str, Enum):
    CHARACTER = "character"
    LINE = "line"


@dataclass(frozen=True, slots=True)
class RegisterValue:
    text: str = ""
    granularity: Granularity = Granularity.CHARACTER

    @property
    def is_empty(self) -> bool:
        return not self.text

    @property
    def linewise(self) -> bool:
        return self.granularity is Granularity.LINE


def foreign_value(text: str) -> RegisterValue:
    """Classify text the engine did not yank itself.

    Text ending in a line break is linewise. Text opening with one is the
    rows that follow it, so it is linewise as well.
    """

    if text.startswith("\n"):
        body = text[1:]
        if not body.endswith("\n"):
            body += "\n"
        return RegisterValue(text=body, granularity=Granularity.LINE)
    if text.endswith("\n"):
        return RegisterValue(text=text, granularity=Granularity.LINE)
    return RegisterValue(text=text, granularity=Granularity.CHARACTER)


class Register(Protocol):
    def read(self) -> RegisterValue:
        ...

    def write(self, text: str, granularity: Granularity) -> None:
        ...


class InternalRegister:
    """Single in-memory slot; the last write wins."""

    def __init__(self) -> None:
        self._value = RegisterValue()

    def read(self) -> RegisterValue:
        return self._value

    def write(self, text: str, granularity: Granularity = Granularity.CHARACTER) -> None:
        self._value = RegisterValue(text=text, granularity=Granularity(granularity))


class ClipboardRegister:
    """Register backed by a host clipboard, falling back to an internal slot.

    The internal slot always mirrors the last write, so a clipboard that
    refuses a call (or is missing altogether) degrades to in-process
    yank/paste without the caller noticing.
    """

    def __init__(
        self,
        service: Optional[ClipboardService],
        *,
        fallback: Optional[InternalRegister] = None,
    ) -> None:
        self.service = service
        self.fallback = fallback or InternalRegister()

    def read(self) -> RegisterValue:
        remembered = self.fallback.read()
        if self.service is None:
            return remembered
        try:
            text = self.service.read()
        except Exception as exc:
            self._record_fallback("read", exc)
            return remembered
        if text is None:
            return remembered
        if text == remembered.text:
            return remembered
        return foreign_value(text)

    def write(self, text: str, granularity: Granularity = Granularity.CHARACTER) -> None:
        self.fallback.write(text, granularity)
        if self.service is None:
            return
        try:
            self.service.write(text)
        except Exception as exc:
            self._record_fallback("write", exc)

    def _record_fallback(self, operation: str, exc: Exception) -> None:
        telemetry.record_event(
            "register.clipboard_fallback",
            level="debug",
            data={"operation": operation, "error": repr(exc)},
            logger_name="vim_core.registers",
        )


def create_register(
    backend: str = "internal", *, service: Optional[ClipboardService] = None
) -> Register:
    """Build the register selected by configuration."""

    if backend == "internal":
        return InternalRegister()
    if backend == "external":
        return ClipboardRegister(service)
    raise ValueError(f"Unknown clipboard backend '{backend}'")


__all__ = [
    "ClipboardRegister",
    "Granularity",
    "InternalRegister",
    "Register",
    "RegisterValue",
    "create_register",
    "foreign_value",
]

"""Events exchanged between the timer, the tray menu and the application."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Tick:
    """Emitted by the refresh timer; ``sequence`` counts ticks since start."""
    sequence: int = 0


@dataclass(frozen=True)
class SymbolSelected:
    symbol: str


@dataclass(frozen=True)
class PreferencesRequested:
    pass


@dataclass(frozen=True)
class HelpRequested:
    pass


@dataclass(frozen=True)
class AboutRequested:
    pass


@dataclass(frozen=True)
class QuitRequested:
    pass

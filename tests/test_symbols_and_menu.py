"""Tests for the symbol registry and the menu projector."""

import threading

from layout import PAD_CHAR, SEPARATOR, UNKNOWN_QUOTE, LabelFormatter
from menu import MenuProjector
from symbols import SymbolRegistry
from tests.conftest import FakeMeasurer, FakeSurface


class TestSymbolRegistry:
    def test_initial_snapshot(self):
        registry = SymbolRegistry(["AAPL", "GOOG"])
        assert registry.snapshot() == (0, ("AAPL", "GOOG"))

    def test_replace_bumps_epoch(self, registry):
        assert registry.replace(["AAPL"]) == 1
        assert registry.replace(["AAPL"]) == 2
        assert registry.epoch == 2
        assert registry.symbols == ("AAPL",)

    def test_replace_keeps_order_and_duplicates(self, registry):
        registry.replace(["MSFT", "AAPL", "MSFT"])
        assert registry.symbols == ("MSFT", "AAPL", "MSFT")

    def test_replace_copies_input(self, registry):
        symbols = ["AAPL"]
        registry.replace(symbols)
        symbols.append("GOOG")
        assert registry.symbols == ("AAPL",)

    def test_listeners_receive_epoch_and_symbols(self, registry):
        calls = []
        registry.subscribe(lambda epoch, symbols: calls.append((epoch, symbols)))
        registry.replace(["AAPL", "GOOG"])
        registry.replace([])
        assert calls == [(1, ("AAPL", "GOOG")), (2, ())]

    def test_snapshot_from_other_thread(self, registry):
        registry.replace(["AAPL"])
        result = []
        thread = threading.Thread(target=lambda: result.append(registry.snapshot()))
        thread.start()
        thread.join(5)
        assert result == [(1, ("AAPL",))]


class TestMenuProjector:
    def test_rebuild_creates_rows_in_order(self, registry, projector, surface, formatter):
        registry.replace(["AAPL", "GOOG"])
        assert surface.texts == [
            "AAPL" + PAD_CHAR * 2 + SEPARATOR + "???",
            "GOOG" + PAD_CHAR + SEPARATOR + "???",
        ]
        assert projector.symbol_at(1) == "GOOG"

    def test_rebuild_is_idempotent(self, registry, projector, surface):
        registry.replace(["AAPL", "GOOG", "I"])
        first = surface.texts
        registry.replace(["AAPL", "GOOG", "I"])
        assert surface.texts == first

    def test_rebuild_replaces_all_rows(self, registry, projector, surface):
        registry.replace(["AAPL", "GOOG"])
        old_rows = list(surface.rows)
        registry.replace(["AAPL", "GOOG"])
        assert surface.clear_count == 2
        assert all(new is not old for new, old in zip(surface.rows, old_rows))

    def test_rebuild_recomputes_max_width(self, registry, projector, formatter):
        registry.replace(["GOOG"])
        assert formatter.metrics.max_width == 40
        registry.replace(["I"])
        assert formatter.metrics.max_width == 3

    def test_empty_symbol_list_gives_empty_menu(self, registry, projector, surface):
        registry.replace(["AAPL"])
        registry.replace([])
        assert surface.rows == []

    def test_apply_quotes_keeps_row_identity(self, registry, projector, surface):
        registry.replace(["AAPL", "GOOG"])
        rows = list(surface.rows)
        assert projector.apply_quotes(registry.epoch, [150.5, UNKNOWN_QUOTE])
        assert surface.rows == rows
        assert surface.texts == [
            "AAPL" + PAD_CHAR * 2 + SEPARATOR + PAD_CHAR * 2 + "150.50",
            "GOOG" + PAD_CHAR + SEPARATOR + "???",
        ]

    def test_apply_quotes_for_old_epoch_is_discarded(self, registry, projector, surface):
        registry.replace(["AAPL"])
        old_epoch = registry.epoch
        registry.replace(["GOOG"])
        assert not projector.apply_quotes(old_epoch, [99.0])
        assert surface.texts == ["GOOG" + PAD_CHAR + SEPARATOR + "???"]

    def test_short_quote_batch_leaves_remaining_rows_unknown(self, registry, projector, surface):
        registry.replace(["AAPL", "GOOG"])
        projector.apply_quotes(registry.epoch, [1.0])
        assert surface.texts[1].endswith(SEPARATOR + "???")

    def test_standalone_projector(self):
        surface = FakeSurface()
        projector = MenuProjector(surface, LabelFormatter(FakeMeasurer()))
        projector.rebuild(7, ["MSFT"])
        assert projector.epoch == 7
        assert surface.texts == ["MSFT" + PAD_CHAR + SEPARATOR + "???"]

from layout import UNKNOWN_QUOTE


class MenuProjector:
    """
    Keeps one menu row per symbol and writes formatted labels into them.

    Rows are bound to symbols by position. A new symbol list always replaces
    every row; quote updates only change the label text. All methods touch the
    UI surface and must run on the UI thread.
    """

    def __init__(self, surface, formatter):
        self.surface = surface
        self.formatter = formatter
        self.rows = []
        self.symbols = ()
        self.epoch = None

    def rebuild(self, epoch, symbols):
        self.surface.clear_all_rows()
        self.rows = []
        self.symbols = tuple(symbols)
        self.epoch = epoch
        self.formatter.update_symbols(self.symbols)
        for symbol in self.symbols:
            self.rows.append(self.surface.create_row(self.formatter.format(symbol, UNKNOWN_QUOTE)))
        print(f"[MENU] Built {len(self.rows)} rows (epoch {epoch}).")

    def apply_quotes(self, epoch, quotes):
        """Updates row labels in place; results for another epoch are discarded."""
        if epoch != self.epoch:
            print(f"[MENU] Discarding quotes for epoch {epoch}, menu is at epoch {self.epoch}.")
            return False
        if len(quotes) != len(self.rows):
            print(f"[MENU] Got {len(quotes)} quotes for {len(self.rows)} rows, missing rows stay unknown.")
        for index, (row, symbol) in enumerate(zip(self.rows, self.symbols)):
            quote = quotes[index] if index < len(quotes) else UNKNOWN_QUOTE
            self.surface.set_row_text(row, self.formatter.format(symbol, quote))
        return True

    def symbol_at(self, index):
        return self.symbols[index]

import customtkinter as ctk
import pystray
import webbrowser

import config
import database as db
import quotes_client
from dialogs import PreferencesDialog, show_about, show_help
from dispatcher import UiDispatcher
from errors import UiDispatchFailure
from events import AboutRequested, HelpRequested, PreferencesRequested, QuitRequested, SymbolSelected
from layout import LabelFormatter, WidthMeasurer, symbol_from_label
from menu import MenuProjector
from refresher import RefreshScheduler
from symbols import SymbolRegistry
from tray import TraySurface

UI_POLL_INTERVAL_MS = 100


class StockIndicator(ctk.CTk):
    """
    Tray-only application. The (hidden) Tk root owns the UI thread: it drains
    the dispatcher queue and hosts the dialogs.
    """

    def __init__(self, configuration):
        super().__init__()
        self.withdraw()
        self.title(config.APP_NAME)

        self.configuration = configuration
        self.preferences_dialog = None
        self.is_quitting = False

        self.dispatcher = UiDispatcher()
        self.registry = SymbolRegistry()
        self.formatter = LabelFormatter(WidthMeasurer())

        footer = (
            pystray.MenuItem('Preferences', self._menu_action(PreferencesRequested())),
            pystray.MenuItem('Help', self._menu_action(HelpRequested())),
            pystray.MenuItem('About', self._menu_action(AboutRequested())),
            pystray.MenuItem('Quit', self._menu_action(QuitRequested())),
        )
        self.surface = TraySurface(config.APP_NAME, footer, self.on_row_activated)
        self.projector = MenuProjector(self.surface, self.formatter)
        self.registry.subscribe(self.projector.rebuild)
        self.registry.replace(configuration.symbols)

        self.scheduler = RefreshScheduler(self.registry, quotes_client.fetch_quotes, self.projector,
                                          self.dispatcher, configuration.update_interval)

        self.protocol("WM_DELETE_WINDOW", lambda: self.handle(QuitRequested()))
        self.surface.show()
        self.scheduler.start()
        self.check_ui_queue()

    # --- Cross-thread plumbing ---

    def _menu_action(self, event):
        def action(icon, item):
            self.post_event(event)
        return action

    def on_row_activated(self, label):
        # Called on pystray's thread with the row's label
        self.post_event(SymbolSelected(symbol_from_label(label)))

    def post_event(self, event):
        try:
            self.dispatcher.post(lambda: self.handle(event))
        except UiDispatchFailure as e:
            print(f"[UI] Dropping {type(event).__name__}: {e}")

    def check_ui_queue(self):
        if self.is_quitting:
            return
        try:
            self.dispatcher.drain()
        finally:
            self.after(UI_POLL_INTERVAL_MS, self.check_ui_queue)

    # --- Event handling (UI thread) ---

    def handle(self, event):
        if isinstance(event, SymbolSelected):
            self.open_chart(event.symbol)
        elif isinstance(event, PreferencesRequested):
            self.open_preferences()
        elif isinstance(event, HelpRequested):
            show_help()
        elif isinstance(event, AboutRequested):
            show_about()
        elif isinstance(event, QuitRequested):
            self.quit_application()
        else:
            print(f"[UI] Unhandled event {event!r}")

    def open_chart(self, symbol):
        url = quotes_client.chart_url(symbol)
        print(f"[UI] Opening chart for {symbol}: {url}")
        try:
            webbrowser.open(url)
        except Exception as e:
            print(f"Error opening browser for {symbol}: {e}")

    def open_preferences(self):
        if self.preferences_dialog is not None and self.preferences_dialog.winfo_exists():
            self.preferences_dialog.focus_force()
            return
        self.preferences_dialog = PreferencesDialog(self, self.configuration, self.on_preferences_saved)

    def on_preferences_saved(self, _configuration):
        self.preferences_dialog = None
        self.apply_configuration(config.load_configuration())

    def apply_configuration(self, configuration):
        """Re-injects configuration: restarts the timer and rebuilds the menu."""
        self.configuration = configuration
        self.registry.replace(configuration.symbols)
        self.scheduler.restart(configuration.update_interval)

    def quit_application(self):
        if self.is_quitting:
            return
        self.is_quitting = True
        self.scheduler.stop()
        self.dispatcher.close()
        self.surface.dispose()
        self.after(100, self.destroy)


def main():
    db.initialize_database()
    app = StockIndicator(config.load_configuration())
    app.mainloop()


if __name__ == "__main__":
    main()

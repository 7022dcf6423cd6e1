import customtkinter as ctk
from tkinter import messagebox

from config import APP_DESCRIPTION, APP_NAME, APP_VERSION, Configuration, parse_interval, parse_symbols, save_configuration
from errors import ConfigurationError

HELP_TEXT = (
    "The tray menu lists one line per stock symbol with its latest price.\n\n"
    "Prices refresh automatically at the configured interval. \"???\" means the "
    "price could not be fetched; it is retried on the next refresh.\n\n"
    "Click a line to open the symbol's chart in your web browser. Use "
    "Preferences to change the symbols and the refresh interval."
)


class PreferencesDialog(ctk.CTkToplevel):
    """Edits the symbol list and update interval; calls ``on_saved(configuration)`` after saving."""

    def __init__(self, master, configuration, on_saved):
        super().__init__(master)
        self.on_saved = on_saved

        self.title(f"{APP_NAME} Preferences")
        self.geometry("460x220")
        self.resizable(False, False)

        settings_frame = ctk.CTkFrame(self)
        settings_frame.pack(padx=20, pady=20, fill="x")

        ctk.CTkLabel(settings_frame, text="Symbols (comma separated):").grid(row=0, column=0, padx=10, pady=10, sticky="w")
        self.symbols_entry = ctk.CTkEntry(settings_frame, width=220, placeholder_text="e.g., AAPL, GOOG")
        self.symbols_entry.grid(row=0, column=1, padx=10, pady=10, sticky="ew")
        self.symbols_entry.insert(0, ", ".join(configuration.symbols))

        ctk.CTkLabel(settings_frame, text="Update Interval (seconds):").grid(row=1, column=0, padx=10, pady=10, sticky="w")
        self.interval_entry = ctk.CTkEntry(settings_frame, width=80, placeholder_text="e.g., 60")
        self.interval_entry.grid(row=1, column=1, padx=10, pady=10, sticky="w")
        self.interval_entry.insert(0, str(configuration.update_interval))

        settings_frame.grid_columnconfigure(1, weight=1)

        button_frame = ctk.CTkFrame(self, fg_color="transparent")
        button_frame.pack(pady=(0, 10))
        ctk.CTkButton(button_frame, text="Save", command=self.save).pack(side="left", padx=5)
        ctk.CTkButton(button_frame, text="Cancel", command=self.destroy).pack(side="left", padx=5)

        self.protocol("WM_DELETE_WINDOW", self.destroy)
        self.after(100, self.focus_force)

    def save(self):
        try:
            symbols = parse_symbols(self.symbols_entry.get())
            interval = parse_interval(self.interval_entry.get())
        except ConfigurationError as e:
            messagebox.showerror("Error", str(e), parent=self)
            return

        configuration = Configuration(symbols=symbols, update_interval=interval)
        try:
            save_configuration(configuration)
        except Exception as e:
            messagebox.showerror("Error", f"Failed to save preferences: {e}", parent=self)
            return

        print(f"[CONFIG] Preferences saved: {', '.join(symbols)} every {interval}s.")
        self.destroy()
        self.on_saved(configuration)


def show_about(parent=None):
    messagebox.showinfo(f"About {APP_NAME}", f"{APP_NAME} {APP_VERSION}\n\n{APP_DESCRIPTION}", parent=parent)


def show_help(parent=None):
    messagebox.showinfo(f"{APP_NAME} Help", HELP_TEXT, parent=parent)

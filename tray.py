import pystray
from PIL import Image, ImageDraw

from errors import UiDispatchFailure


class MenuRow:
    """Handle of one quote line in the tray menu."""

    def __init__(self, text):
        self.text = text


def create_icon_image(size=64):
    """Draws the tray icon: a rising line chart on a dark tile."""
    image = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    draw.rounded_rectangle((2, 2, size - 3, size - 3), radius=size // 8, fill=(40, 44, 52, 255))
    points = [(size * 0.15, size * 0.75), (size * 0.4, size * 0.5), (size * 0.6, size * 0.62), (size * 0.85, size * 0.25)]
    draw.line(points, fill=(80, 200, 120, 255), width=max(2, size // 12), joint="curve")
    return image


class TraySurface:
    """
    Tray icon whose menu lists one row per symbol followed by the fixed entries.

    The menu is generated from the current rows each time it is shown, so a
    label change only needs update_menu(). Callers mutate rows from the UI
    thread; activations arrive on pystray's thread and are handed to
    ``on_row_activated`` with the row's label text.
    """

    def __init__(self, name, footer_items, on_row_activated, image=None):
        self.rows = []
        self.footer_items = tuple(footer_items)
        self.on_row_activated = on_row_activated
        self.disposed = False
        self.visible = False
        self.icon = pystray.Icon(name, image or create_icon_image(), name, menu=pystray.Menu(self._menu_items))

    def _menu_items(self):
        for row in self.rows:
            yield pystray.MenuItem(lambda item, row=row: row.text, self._row_clicked)
        if self.rows:
            yield pystray.Menu.SEPARATOR
        yield from self.footer_items

    def _row_clicked(self, icon, item):
        self.on_row_activated(str(item.text))

    def _refresh(self):
        if self.disposed:
            raise UiDispatchFailure("Tray icon has been disposed.")
        if self.visible:
            self.icon.update_menu()

    def create_row(self, text):
        row = MenuRow(text)
        self.rows.append(row)
        self._refresh()
        return row

    def set_row_text(self, row, text):
        if self.disposed:
            raise UiDispatchFailure("Tray icon has been disposed.")
        row.text = text
        self._refresh()

    def clear_all_rows(self):
        self.rows = []
        self._refresh()

    def show(self):
        self.icon.run_detached()
        self.visible = True

    def dispose(self):
        self.disposed = True
        if self.visible:
            self.visible = False
            self.icon.stop()

import sqlite3
import os

DEFAULT_SETTINGS = {
    "symbols": '["AAPL", "GOOG", "MSFT"]',
    "update_interval": "60",
}

def get_db_path():
    """Returns the absolute path to the settings database in the user's AppData folder."""
    app_data_path = os.getenv('APPDATA')
    if not app_data_path:
        # Fallback for environments where APPDATA is not set
        app_data_path = os.path.expanduser('~')

    db_dir = os.path.join(app_data_path, 'StockIndicator')
    os.makedirs(db_dir, exist_ok=True)
    return os.path.join(db_dir, 'settings.db')

def get_connection():
    """Establishes and returns a database connection."""
    return sqlite3.connect(get_db_path())

def initialize_database():
    """
    Creates the settings table if it doesn't exist and fills in the default
    symbol list and update interval on first run.
    """
    conn = get_connection()
    cursor = conn.cursor()

    # Key-value store; quotes are never persisted
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS settings (
            key TEXT PRIMARY KEY,
            value TEXT
        )
    """)

    for key, value in DEFAULT_SETTINGS.items():
        cursor.execute("INSERT OR IGNORE INTO settings (key, value) VALUES (?, ?)", (key, value))

    conn.commit()
    conn.close()

# --- Settings Functions ---

def save_setting(key, value):
    """Saves a setting to the database."""
    conn = get_connection()
    cursor = conn.cursor()
    cursor.execute("INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)", (key, value))
    conn.commit()
    conn.close()

def get_setting(key):
    """Retrieves a setting from the database."""
    conn = get_connection()
    cursor = conn.cursor()
    cursor.execute("SELECT value FROM settings WHERE key = ?", (key,))
    result = cursor.fetchone()
    conn.close()
    return result[0] if result else None

if __name__ == '__main__':
    initialize_database()
    print(f"Database initialized successfully at {get_db_path()}")

import os
import json
import sqlite3
import time


class DatabaseManager:
    """Key-value save slots in sqlite, so the pet stays 'alive' on disk."""
    def __init__(self, db_path):
        self.db_path = db_path
        self.conn = sqlite3.connect(db_path)
        self.create_tables()

    def create_tables(self):
        query = """
        CREATE TABLE IF NOT EXISTS saves (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at REAL
        )
        """
        self.conn.execute(query)
        self.conn.commit()

    def get_item(self, key):
        """Returns the stored string for key, or None when the slot is empty."""
        cursor = self.conn.execute("SELECT value FROM saves WHERE key = ?", (key,))
        row = cursor.fetchone()
        return row[0] if row else None

    def set_item(self, key, value):
        self.conn.execute(
            "INSERT OR REPLACE INTO saves (key, value, updated_at) VALUES (?, ?, ?)",
            (key, value, time.time()),
        )
        self.conn.commit()

    def remove_item(self, key):
        self.conn.execute("DELETE FROM saves WHERE key = ?", (key,))
        self.conn.commit()

    def close(self):
        self.conn.close()


class JsonFileStore:
    """Same slots as DatabaseManager, kept in a single JSON file."""
    def __init__(self, path):
        self.path = path
        self.items = self._read()

    def _read(self):
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            print(f"Warning: failed to read save file '{self.path}': {e}")
            return {}
        if not isinstance(data, dict):
            print(f"Warning: save file '{self.path}' is not a JSON object, ignoring it.")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self):
        # Write to a temp file then atomically replace the save file
        tmp = self.path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(self.items, f, indent=2)
        os.replace(tmp, self.path)

    def get_item(self, key):
        return self.items.get(key)

    def set_item(self, key, value):
        self.items[key] = value
        self._write()

    def remove_item(self, key):
        if self.items.pop(key, None) is not None:
            self._write()

    def close(self):
        pass


def open_store(path):
    """Pick a store by file extension: .json files get JsonFileStore, the rest sqlite."""
    if str(path).lower().endswith(".json"):
        return JsonFileStore(path)
    return DatabaseManager(path)

from collections import namedtuple
from pathlib import Path
import yaml

Widget = namedtuple('Widget', ['id', 'name', 'description', 'thumbnail', 'zip'])


class WidgetCatalog:
    """
    Reads the offerable widgets from a JSON (or YAML) file.

    The file is re-read on every call so editors can change the catalog while
    the app is running.
    """

    def __init__(self, path):
        self.path = Path(path)

    def load(self):
        """Return all widgets, in file order"""
        with open(self.path, 'r', encoding='utf-8') as f:
            entries = yaml.safe_load(f) or []

        return [
            Widget(
                id=str(entry['id']),
                name=entry.get('name', ''),
                description=entry.get('description', ''),
                thumbnail=entry.get('thumbnail', ''),
                zip=entry['zip'],
            )
            for entry in entries
        ]

    def get(self, widget_id):
        """Find a widget by id, or None if the catalog no longer has it"""
        if not widget_id:
            return None
        for widget in self.load():
            if widget.id == widget_id:
                return widget
        return None

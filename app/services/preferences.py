"""
Per-user UI preferences stored in Redis.

Keys:
    prefs:{email}          → hash: theme, expanded_panels (JSON), last_filter
    prefs:{email}:visited  → set of visited link URLs
"""
import json
import logging
from typing import Dict, Optional

from app.errors import ValidationError

logger = logging.getLogger('services.preferences')

THEMES = ('light', 'dark')
DEFAULT_THEME = 'light'


class Preferences:
    """Preference store scoped to one user (namespaced by email)."""

    def __init__(self, user_email: str, client=None):
        if not user_email:
            raise ValueError("user_email is required")
        self.user_email = user_email.strip().lower()
        if client is None:
            from app.extensions import redis_client as client
        self.r = client

    @property
    def key(self) -> str:
        return f'prefs:{self.user_email}'

    @property
    def visited_key(self) -> str:
        return f'prefs:{self.user_email}:visited'

    # ── theme ──

    def get_theme(self) -> str:
        return self.r.hget(self.key, 'theme') or DEFAULT_THEME

    def set_theme(self, theme: str):
        if theme not in THEMES:
            raise ValidationError(f"theme must be one of: {', '.join(THEMES)}", field='theme')
        self.r.hset(self.key, 'theme', theme)

    # ── expanded panels ──

    def get_expanded_panels(self) -> Dict[str, bool]:
        raw = self.r.hget(self.key, 'expanded_panels')
        if not raw:
            return {}
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Discarding malformed expanded_panels for %s", self.user_email)
            return {}

    def set_expanded_panels(self, panels: Dict[str, bool]):
        if not isinstance(panels, dict) or not all(isinstance(v, bool) for v in panels.values()):
            raise ValidationError("expandedPanels must map panel names to booleans", field='expandedPanels')
        self.r.hset(self.key, 'expanded_panels', json.dumps(panels))

    # ── last filter ──

    def get_last_filter(self) -> Optional[str]:
        return self.r.hget(self.key, 'last_filter')

    def set_last_filter(self, value: Optional[str]):
        if value is None:
            self.r.hdel(self.key, 'last_filter')
        else:
            self.r.hset(self.key, 'last_filter', str(value))

    # ── visited links ──

    def mark_visited(self, url: str):
        if not url:
            raise ValidationError("url is required", field='url')
        self.r.sadd(self.visited_key, url)

    def visited_links(self) -> set:
        return set(self.r.smembers(self.visited_key))

    # ── bulk ──

    def to_dict(self) -> Dict:
        return {
            'theme': self.get_theme(),
            'expandedPanels': self.get_expanded_panels(),
            'lastFilter': self.get_last_filter(),
            'visitedLinks': sorted(self.visited_links()),
        }

    def update(self, changes: Dict):
        """Apply a partial update with application-shaped keys."""
        setters = {
            'theme': self.set_theme,
            'expandedPanels': self.set_expanded_panels,
            'lastFilter': self.set_last_filter,
        }
        unknown = sorted(set(changes) - set(setters))
        if unknown:
            raise ValidationError(f"Unknown preference(s): {', '.join(unknown)}", field=unknown[0])
        for key, value in changes.items():
            setters[key](value)

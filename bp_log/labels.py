"""Display strings for the supported languages.

The core only emits identifiers (category keys, phrase keys); this module
turns them into text at the UI/CLI boundary.
"""

from __future__ import annotations

import logging
from typing import Any

from bp_log.categories import Category

logger = logging.getLogger(__name__)

LANGUAGES = ("gu", "en")
DEFAULT_LANGUAGE = "gu"

STRINGS: dict[str, dict[str, Any]] = {
    "gu": {
        "app_title": "બ્લડ પ્રેશર લોગ્સ",
        "nav": {"entry": "એન્ટ્રી", "logs": "લોગ્સ"},
        "category": {
            "normal": "સામાન્ય",
            "elevated": "વધેલું",
            "stage1": "હાઈ બીપી સ્ટેજ 1",
            "stage2": "હાઈ બીપી સ્ટેજ 2",
            "crisis": "હાયપરટેન્સિવ કટોકટી",
        },
        "trend": {
            "same": "ગઈકાલ જેટલું જ",
            "better": "ગઈકાલ કરતાં {delta} ઓછું",
            "worse": "ગઈકાલ કરતાં {delta} વધારે",
        },
        "streak": {"days": "{n} દિવસની સ્ટ્રીક", "day": "{n} દિવસની સ્ટ્રીક"},
        "pattern": {
            "morning": "સામાન્ય રીતે સવારે લોગ કરો છો",
            "evening": "સામાન્ય રીતે સાંજે લોગ કરો છો",
        },
        "insights": {
            "title": "આજની માહિતી",
            "today": "આજે",
            "yesterday": "ગઈકાલે",
            "week": "છેલ્લા 7 દિવસ",
            "based_on": "છેલ્લા 7 દિવસમાં {n} રીડિંગ્સ પર આધારિત",
        },
        "login": {
            "title": "લોગિન",
            "pin": "PIN દાખલ કરો",
            "submit": "ખોલો",
            "wrong_pin": "ખોટો PIN",
        },
        "entry": {
            "title": "નવી એન્ટ્રી",
            "systolic": "ઉપરનું (Uparnu)",
            "diastolic": "નીચેનું (Neechenu)",
            "pulse": "નાડી (Pulse)",
            "reading_time": "રીડિંગ સમય",
            "save": "સેવ કરો",
            "save_success": "એન્ટ્રી સફળતાપૂર્વક સેવ થઈ!",
            "save_error": "એન્ટ્રી સેવ કરવામાં નિષ્ફળ. ફરી પ્રયાસ કરો.",
            "validation_error": "કૃપા કરીને બધી જરૂરી ફીલ્ડ ભરો",
            "mode": "મોડ",
        },
        "session": {
            "title": "રીડિંગ સેશન",
            "add_reading": "વધુ રીડિંગ ઉમેરો",
            "remove_reading": "રીડિંગ દૂર કરો",
            "reading": "રીડિંગ",
            "average": "સરેરાશ",
            "override": "સરેરાશ બદલો",
            "reading_count": "રીડિંગ્સ",
            "single_mode": "સિંગલ રીડિંગ",
            "session_mode": "સેશન મોડ",
            "individual_readings": "વ્યક્તિગત રીડિંગ્સ",
            "out_of_range": "{n} રીડિંગ માન્ય શ્રેણીની બહાર છે અને સેવ થશે નહીં",
        },
        "logs": {
            "title": "લોગ્સ",
            "bp": "બી.પી.",
            "pulse": "નાડી",
            "empty": "લોગ્સ નથી. એન્ટ્રી ઉમેરો!",
            "load_error": "લોગ્સ લોડ કરવામાં નિષ્ફળ",
            "delete": "કાઢી નાખો",
            "chart_title": "બ્લડ પ્રેશર ટ્રેન્ડ",
            "sys": "ઉપરનું (SYS)",
            "dia": "નીચેનું (DIA)",
            "range": "સમયગાળો",
        },
        "range": {"today": "આજે", "5d": "5 દિવસ", "10d": "10 દિવસ", "30d": "30 દિવસ"},
    },
    "en": {
        "app_title": "Blood Pressure Logs",
        "nav": {"entry": "Entry", "logs": "Logs"},
        "category": {
            "normal": "Normal",
            "elevated": "Elevated",
            "stage1": "High BP Stage 1",
            "stage2": "High BP Stage 2",
            "crisis": "Hypertensive Crisis",
        },
        "trend": {
            "same": "About the same as yesterday",
            "better": "{delta} SYS lower than yesterday",
            "worse": "{delta} SYS higher than yesterday",
        },
        "streak": {"days": "{n} days streak", "day": "{n} day streak"},
        "pattern": {
            "morning": "Usually logs in the morning",
            "evening": "Usually logs in the evening",
        },
        "insights": {
            "title": "Today's Insights",
            "today": "Today",
            "yesterday": "Yesterday",
            "week": "Last 7 days",
            "based_on": "Based on {n} readings in the last 7 days",
        },
        "login": {
            "title": "Login",
            "pin": "Enter PIN",
            "submit": "Unlock",
            "wrong_pin": "Incorrect PIN",
        },
        "entry": {
            "title": "New Entry",
            "systolic": "Systolic (Uparnu)",
            "diastolic": "Diastolic (Neechenu)",
            "pulse": "Pulse (Nadi)",
            "reading_time": "Reading Time",
            "save": "Save",
            "save_success": "Entry saved successfully!",
            "save_error": "Failed to save entry. Please try again.",
            "validation_error": "Please fill all required fields",
            "mode": "Mode",
        },
        "session": {
            "title": "Reading Session",
            "add_reading": "Add Another Reading",
            "remove_reading": "Remove Reading",
            "reading": "Reading",
            "average": "Average",
            "override": "Edit average",
            "reading_count": "readings",
            "single_mode": "Single Reading",
            "session_mode": "Session Mode",
            "individual_readings": "Individual Readings",
            "out_of_range": "{n} reading(s) outside accepted ranges will not be saved",
        },
        "logs": {
            "title": "Logs",
            "bp": "B.P.",
            "pulse": "Pulse",
            "empty": "No logs yet. Add an entry!",
            "load_error": "Failed to load logs",
            "delete": "Delete",
            "chart_title": "Blood Pressure Trend",
            "sys": "SYS",
            "dia": "DIA",
            "range": "Range",
        },
        "range": {"today": "Today", "5d": "5 Days", "10d": "10 Days", "30d": "30 Days"},
    },
}


class LabelProvider:
    """Look up display strings for one language."""

    def __init__(self, language: str = DEFAULT_LANGUAGE):
        if language not in STRINGS:
            logger.warning(f"Unknown language '{language}', using '{DEFAULT_LANGUAGE}'")
            language = DEFAULT_LANGUAGE
        self.language = language
        self._strings = STRINGS[language]

    def t(self, key: str, **params: Any) -> str:
        """Translate a dotted key, e.g. ``"entry.save"``.

        Unknown keys are returned unchanged.
        """
        value: Any = self._strings
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return key
            value = value[part]
        if not isinstance(value, str):
            return key
        return value.format(**params) if params else value

    def category_label(self, category: Category) -> str:
        return self.t(category.label_key)

    def format_streak(self, days: int) -> str:
        return self.t("streak.day" if days == 1 else "streak.days", n=days)

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - Activity Categorizer
Maps free text (plus an optional category hint) to a Life Area

Rules are ordered and the first match wins. Hint rules are checked before
keyword rules, so an explicit category always outranks words in the text.

Version: 1.0.0
"""

import re
from typing import Optional, Sequence, Tuple

from eunoia.core.models import LifeArea
from eunoia.utils.text_utils import is_blank

Rule = Tuple[Tuple[str, ...], LifeArea]

# Matched against whole words of the hint
HINT_RULES: Sequence[Rule] = (
    (("work", "career", "job", "business"), LifeArea.WORK_CAREER),
    (("learning", "education", "growth", "books"), LifeArea.PERSONAL_GROWTH),
    (("health", "fitness", "wellness", "medical", "exercise"), LifeArea.HEALTH_WELLNESS),
    (("social", "family", "friends", "relationships", "gifts"), LifeArea.SOCIAL_RELATIONSHIPS),
    (("finance", "bills", "utilities", "savings", "investment", "rent"), LifeArea.FINANCE),
    (("entertainment", "hobby", "hobbies", "leisure", "travel"), LifeArea.HOBBIES_LEISURE),
    (("food", "groceries", "household", "chores", "transport"), LifeArea.RESPONSIBILITIES_CHORES),
)

# Matched as substrings of the lower-cased text
KEYWORD_RULES: Sequence[Rule] = (
    (("work", "project", "meeting", "report", "client", "job"), LifeArea.WORK_CAREER),
    (("learn", "read", "course", "skill", "study"), LifeArea.PERSONAL_GROWTH),
    (("gym", "workout", "run", "yoga", "meditate", "doctor", "health", "sleep", "walk"), LifeArea.HEALTH_WELLNESS),
    (("friend", "family", "partner", "social", "call mom", "date night"), LifeArea.SOCIAL_RELATIONSHIPS),
    (("budget", "finance", "bill", "expense", "invest"), LifeArea.FINANCE),
    (("hobby", "game", "movie", "music", "relax", "leisure", "watch"), LifeArea.HOBBIES_LEISURE),
    (("chore", "errand", "clean", "grocery", "fix"), LifeArea.RESPONSIBILITIES_CHORES),
)


def _match_hint(hint: str) -> Optional[LifeArea]:
    words = set(re.findall(r"[a-z]+", hint))
    for keywords, area in HINT_RULES:
        if any(keyword in words for keyword in keywords):
            return area
    return None


def _match_keywords(text: str) -> Optional[LifeArea]:
    for keywords, area in KEYWORD_RULES:
        if any(keyword in text for keyword in keywords):
            return area
    return None


def categorize_activity(text: Optional[str], hint: Optional[str] = None) -> LifeArea:
    """Return the Life Area for `text`, or UNCATEGORIZED.

    Empty text is uncategorized whatever the hint says.
    """
    if is_blank(text):
        return LifeArea.UNCATEGORIZED

    if not is_blank(hint):
        area = _match_hint(hint.strip().lower())
        if area is not None:
            return area

    return _match_keywords(text.lower()) or LifeArea.UNCATEGORIZED

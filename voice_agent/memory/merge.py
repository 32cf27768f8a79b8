# voice_agent/memory/merge.py
# -*- coding: utf-8 -*-
"""
Voice Agent Server — memory merge helpers
-----------------------------------------
Pure functions that turn (current memory, update) into new memory.

Memory is a small JSON object per user, e.g.:

    {
      "name": "Sam",
      "kids": ["Ada", "Leo"],
      "tone": "playful",
      "persona": "pirate",
      "notes": ["likes dinosaurs", "bedtime is 8pm"]
    }

None of these functions mutate their inputs.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional

NOTES_KEY = "notes"


def shallow_merge(current: Dict[str, Any], patch: Dict[str, Any]) -> Dict[str, Any]:
    """Top-level replace: every key in `patch` overwrites `current`."""
    merged = copy.deepcopy(current)
    merged.update(copy.deepcopy(patch))
    return merged


def deep_merge(current: Dict[str, Any], patch: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursive merge.

    - dict into dict merges key by key,
    - None in the patch removes the key,
    - anything else (lists included) replaces.
    """
    merged = copy.deepcopy(current)
    for key, value in patch.items():
        if value is None:
            merged.pop(key, None)
        elif isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def split_csv(text: str) -> List[str]:
    """'Ada, Leo,,' -> ['Ada', 'Leo']"""
    return [part.strip() for part in text.split(",") if part.strip()]


def trim_notes(memory: Dict[str, Any], max_notes: int) -> Dict[str, Any]:
    """Keep only the last `max_notes` notes. A non-positive limit keeps all."""
    notes = memory.get(NOTES_KEY)
    if not isinstance(notes, list) or max_notes <= 0 or len(notes) <= max_notes:
        return memory

    trimmed = dict(memory)
    trimmed[NOTES_KEY] = notes[-max_notes:]
    return trimmed


def append_note(memory: Dict[str, Any], note: str, max_notes: int) -> Dict[str, Any]:
    """Append `note`, replacing a missing or non-list `notes` value."""
    updated = copy.deepcopy(memory)
    notes = updated.get(NOTES_KEY)
    if not isinstance(notes, list):
        notes = []
    notes.append(note)
    updated[NOTES_KEY] = notes
    return trim_notes(updated, max_notes)


def apply_profile_fields(
    memory: Dict[str, Any],
    *,
    name: Optional[str] = None,
    kids: Optional[str] = None,
    tone: Optional[str] = None,
    persona: Optional[str] = None,
    note: Optional[str] = None,
    max_notes: int = 0,
) -> Dict[str, Any]:
    """
    Apply the query-string style update used by GET /memory/set.

    Empty strings count as "not given", so `?name=` leaves name untouched.
    `kids` is a comma-separated list.
    """
    updated = copy.deepcopy(memory)

    if name:
        updated["name"] = name
    if kids:
        updated["kids"] = split_csv(kids)
    if tone:
        updated["tone"] = tone
    if persona:
        updated["persona"] = persona
    if note:
        updated = append_note(updated, note, max_notes)

    return updated


def describe_memory(memory: Dict[str, Any]) -> str:
    """
    Render memory as a short plain-text block for a system prompt.

    Returns an empty string when there is nothing worth saying.
    """
    lines: List[str] = []
    if memory.get("name"):
        lines.append(f"The user's name is {memory['name']}.")
    kids = memory.get("kids")
    if isinstance(kids, list) and kids:
        lines.append("Their kids: " + ", ".join(str(k) for k in kids) + ".")
    if memory.get("tone"):
        lines.append(f"Preferred tone: {memory['tone']}.")
    if memory.get("persona"):
        lines.append(f"Speak as this persona: {memory['persona']}.")
    notes = memory.get(NOTES_KEY)
    if isinstance(notes, list) and notes:
        lines.append("Things to remember:")
        lines.extend(f"- {n}" for n in notes)
    return "\n".join(lines)

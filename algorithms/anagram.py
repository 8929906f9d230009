"""
anagram.py — Anagram Detection (frequency counting)
====================================================
Both strings are lower-cased with all whitespace removed, then each is
counted into its own frequency map and the maps are compared key by key.
Comparison stops at the first mismatching key.
"""

import re
from typing import Dict, List

from algorithms.step import Step, StepBuilder, StepType

S1, S2 = "string1", "string2"
F1, F2 = "frequencyMap1", "frequencyMap2"


def normalize(text: str) -> str:
    return re.sub(r"\s+", "", text.lower())


def anagram_detection(first: str, second: str) -> List[Step]:
    a, b = normalize(first), normalize(second)
    freq1: Dict[str, int] = {}
    freq2: Dict[str, int] = {}

    steps: List[Step] = []
    sb = StepBuilder()
    sb.track(S1, "string",  list(a), label="String 1")
    sb.track(S2, "string",  list(b), label="String 2", y=1)
    sb.track(F1, "hashmap", freq1,   label="Frequency Map 1", x=1)
    sb.track(F2, "hashmap", freq2,   label="Frequency Map 2", x=1, y=1)

    sb.begin(StepType.INITIALIZATION)
    sb.explanation = (
        f'Starting anagram detection for "{first}" and "{second}". First, we\'ll count '
        "character frequencies in each string."
    )
    sb.variables = {"string1": a, "string2": b, "string1Length": len(a),
                    "string2Length": len(b), "isAnagram": None}
    steps.append(sb.build(len(steps)))

    if len(a) != len(b):
        sb.begin(StepType.STRING_COMPARISON, duration=1500)
        sb.step_context = {"operation": "compare", "dataStructure": "string"}
        sb.highlight(S1, "characters", ["length"], "mismatch")
        sb.highlight(S2, "characters", ["length"], "mismatch")
        sb.explanation = (
            f"Strings have different lengths ({len(a)} vs {len(b)}). "
            "They cannot be anagrams!"
        )
        sb.variables = {"string1": a, "string2": b, "string1Length": len(a),
                        "string2Length": len(b), "isAnagram": False,
                        "reason": "Different lengths"}
        steps.append(sb.build(len(steps)))

        sb.begin(StepType.RETURN_NOT_FOUND, duration=2000)
        sb.step_context = {"operation": "return_value", "dataStructure": "string"}
        sb.explanation = f'Result: "{first}" and "{second}" are NOT anagrams! Lengths differ.'
        sb.variables = {"isAnagram": False, "string1": a, "string2": b,
                        "conclusion": "Not anagrams"}
        steps.append(sb.build(len(steps)))
        return steps

    for which, text, freq, s_name, f_name in ((1, a, freq1, S1, F1), (2, b, freq2, S2, F2)):
        for i, ch in enumerate(text):
            sb.begin(StepType.CHARACTER_ACCESS, duration=800)
            sb.step_context = {"operation": "read", "dataStructure": "string",
                               "characterIndex": i, "stringIndex": which}
            sb.highlight(s_name, "characters", [i], "current")
            sb.explanation = f"Reading character '{ch}' at index {i} of string {which}"
            sb.variables = {"currentChar": ch, "currentIndex": i, "processingString": which,
                            "string1Length": len(a), "string2Length": len(b)}
            steps.append(sb.build(len(steps)))

            freq[ch] = freq.get(ch, 0) + 1

            sb.begin(StepType.FREQUENCY_COUNT, duration=800)
            sb.step_context = {"operation": "write", "dataStructure": "hashmap",
                               "characterIndex": i, "stringIndex": which}
            sb.highlight(s_name, "characters", [i], "active")
            sb.highlight(f_name, "keys", [ch], "highlight")
            sb.explanation = f"Updated frequency map: '{ch}' count is now {freq[ch]}"
            sb.variables = {"currentChar": ch, "currentIndex": i, "charCount": freq[ch],
                            "processingString": which, f_name: dict(freq)}
            steps.append(sb.build(len(steps)))

    keys = list(dict.fromkeys(list(freq1) + list(freq2)))
    is_anagram = True
    compared: List[str] = []
    for key in keys:
        compared.append(key)
        c1, c2 = freq1.get(key, 0), freq2.get(key, 0)
        matches = c1 == c2
        is_anagram = is_anagram and matches
        style = "match" if matches else "mismatch"

        sb.begin(StepType.HASH_MAP_COMPARISON, duration=1200)
        sb.step_context = {"operation": "compare", "dataStructure": "hashmap"}
        sb.highlight(F1, "keys", [key], style)
        sb.highlight(F2, "keys", [key], style)
        sb.explanation = (
            f"Comparing '{key}': String1 has {c1}, String2 has {c2}. "
            + ("✓ Match!" if matches else "✗ Mismatch!")
        )
        sb.variables = {"currentKey": key, "count1": c1, "count2": c2, "keyMatches": matches,
                        "comparedKeys": list(compared),
                        "remainingKeys": len(keys) - len(compared),
                        "isAnagramSoFar": is_anagram}
        steps.append(sb.build(len(steps)))

        if not matches:
            break

    style = "match" if is_anagram else "mismatch"
    sb.begin(StepType.RETURN_FOUND if is_anagram else StepType.RETURN_NOT_FOUND, duration=2000)
    sb.step_context = {"operation": "return_value", "dataStructure": "hashmap"}
    sb.highlight(S1, "characters", range(len(a)), style)
    sb.highlight(S2, "characters", range(len(b)), style)
    sb.explanation = (
        f'Result: "{first}" and "{second}" '
        + ("ARE anagrams! All character frequencies match." if is_anagram
           else "are NOT anagrams! Character frequencies differ.")
    )
    sb.variables = {"isAnagram": is_anagram, "string1": a, "string2": b,
                    "frequencyMap1": dict(freq1), "frequencyMap2": dict(freq2),
                    "conclusion": "Anagrams detected" if is_anagram else "Not anagrams"}
    steps.append(sb.build(len(steps)))
    return steps

"""
balanced_parentheses.py — Bracket Matching with a Stack
========================================================
Opening brackets ( [ { are pushed; a closing bracket must match the
stack top or the check fails immediately. Characters that are not
brackets are read and ignored.

Terminal step is VALIDATION_SUCCESS (stack empty at the end) or
VALIDATION_FAILURE (closing bracket on an empty stack, a mismatch, or
unmatched openers left over).
"""

from typing import Any, Dict, List

from algorithms.step import Step, StepBuilder, StepType

STACK = "stack"
INPUT = "inputString"

PAIRS = {"(": ")", "[": "]", "{": "}"}
CLOSING = set(PAIRS.values())


def _kind(ch: str) -> str:
    if ch in PAIRS:
        return "opening"
    if ch in CLOSING:
        return "closing"
    return "other"


def balanced_parentheses(text: str) -> List[Step]:
    stack: List[Dict[str, Any]] = []
    matched_pairs: List[Dict[str, Any]] = []
    elem_counter = 0

    steps: List[Step] = []
    sb = StepBuilder()
    sb.track(STACK, "stack",  stack,      label="Stack", orientation="vertical")
    sb.track(INPUT, "string", list(text), label="Input String", x=1)

    sb.begin(StepType.INITIALIZATION, duration=1500)
    sb.explanation = (
        f'Starting balanced parentheses check for "{text}". We\'ll use a stack to track '
        "opening brackets and match them with closing brackets."
    )
    sb.variables = {"inputLength": len(text), "currentIndex": -1, "stackSize": 0,
                    "isValid": True}
    steps.append(sb.build(len(steps)))

    for i, ch in enumerate(text):
        kind = _kind(ch)

        sb.begin(StepType.CHARACTER_ACCESS, duration=800)
        sb.step_context = {"operation": "read", "dataStructure": "string", "characterIndex": i}
        sb.highlight(INPUT, "characters", [i], "current")
        sb.explanation = f"Reading character at index {i}: '{ch}'"
        sb.variables = {"currentChar": ch, "currentIndex": i, "charType": kind,
                        "stackSize": len(stack)}
        steps.append(sb.build(len(steps)))

        sb.begin(StepType.CHARACTER_CHECK)
        sb.step_context = {"operation": "validate", "dataStructure": "string",
                           "characterIndex": i}
        if kind != "other":
            sb.step_context["bracketType"] = kind
        sb.highlight(INPUT, "characters", [i], "mismatch" if kind == "other" else "processing")
        if kind == "opening":
            sb.explanation = f"'{ch}' is an opening bracket. Will push to stack."
            action = "push"
        elif kind == "closing":
            sb.explanation = (
                f"'{ch}' is a closing bracket. Need to check if it matches the top of stack."
            )
            action = "pop_and_match"
        else:
            sb.explanation = f"'{ch}' is not a bracket character. Ignoring and continuing."
            action = "ignore"
        sb.variables = {"currentChar": ch, "characterType": kind, "stackSize": len(stack),
                        "action": action}
        steps.append(sb.build(len(steps)))

        if kind == "opening":
            elem = {"value": ch, "id": f"elem_{elem_counter}", "addedAtStep": len(steps)}
            elem_counter += 1
            stack.append(elem)

            sb.begin(StepType.STACK_PUSH, duration=1200)
            sb.step_context = {"operation": "push", "dataStructure": "stack",
                               "stackElement": ch, "characterIndex": i}
            sb.highlight(STACK, "stack_elements", [elem["id"]], "highlight")
            sb.highlight(INPUT, "characters", [i], "valid")
            sb.explanation = f"Pushed '{ch}' onto the stack. Stack size is now {len(stack)}."
            sb.variables = {"pushedElement": ch, "stackSize": len(stack),
                            "stackTop": stack[-1]["value"], "currentIndex": i}
            steps.append(sb.build(len(steps)))
            continue

        if kind == "other":
            continue

        if not stack:
            sb.begin(StepType.VALIDATION_FAILURE, duration=1500)
            sb.step_context = {"operation": "validate", "dataStructure": "stack",
                               "characterIndex": i, "isValid": False}
            sb.highlight(INPUT, "characters", [i], "invalid")
            sb.explanation = (
                f"Error! Found closing bracket '{ch}' but stack is empty. "
                "No matching opening bracket."
            )
            sb.variables = {"currentChar": ch, "stackSize": 0, "isValid": False,
                            "errorType": "no_opening_bracket",
                            "errorMessage": f"No matching opening bracket for '{ch}'"}
            steps.append(sb.build(len(steps)))
            return steps

        top = stack[-1]
        expected = PAIRS[top["value"]]

        sb.begin(StepType.STACK_PEEK)
        sb.step_context = {"operation": "peek", "dataStructure": "stack",
                           "stackElement": top["value"], "characterIndex": i}
        sb.highlight(STACK, "stack_top", [top["id"]], "highlight")
        sb.highlight(INPUT, "characters", [i], "processing")
        sb.explanation = (
            f"Peeking at top of stack: '{top['value']}'. Checking if it matches with '{ch}'."
        )
        sb.variables = {"stackTop": top["value"], "currentChar": ch,
                        "expectedClosing": expected, "willMatch": expected == ch}
        steps.append(sb.build(len(steps)))

        if expected != ch:
            sb.begin(StepType.VALIDATION_FAILURE, duration=1500)
            sb.step_context = {"operation": "validate", "dataStructure": "stack",
                               "characterIndex": i, "isValid": False}
            sb.highlight(STACK, "stack_top", [top["id"]], "invalid")
            sb.highlight(INPUT, "characters", [i], "invalid")
            sb.explanation = (
                f"Error! Mismatched brackets: '{top['value']}' expects '{expected}' "
                f"but found '{ch}'."
            )
            sb.variables = {"stackTop": top["value"], "currentChar": ch, "expected": expected,
                            "found": ch, "isValid": False, "errorType": "mismatched_brackets",
                            "errorMessage": (f"Mismatched brackets: expected '{expected}' "
                                             f"but found '{ch}'")}
            steps.append(sb.build(len(steps)))
            return steps

        stack.pop()
        matched_pairs.append({"opening": top["value"], "closing": ch, "index": i})

        sb.begin(StepType.STACK_POP, duration=1200)
        sb.step_context = {"operation": "pop", "dataStructure": "stack",
                           "stackElement": top["value"], "matchingBracket": ch,
                           "characterIndex": i}
        sb.highlight(INPUT, "characters", [i], "valid")
        sb.explanation = (
            f"Match found! '{top['value']}' matches '{ch}'. Popped '{top['value']}' from "
            f"stack. Stack size is now {len(stack)}."
        )
        sb.variables = {"poppedElement": top["value"], "matchingChar": ch,
                        "stackSize": len(stack), "matchingPairs": len(matched_pairs),
                        "currentIndex": i}
        steps.append(sb.build(len(steps)))

    leftover = [e["value"] for e in stack]
    balanced = not stack

    sb.begin(StepType.VALIDATION_SUCCESS if balanced else StepType.VALIDATION_FAILURE,
             duration=2000)
    sb.step_context = {"operation": "validate", "dataStructure": "stack", "isValid": balanced}
    if stack:
        sb.highlight(STACK, "stack_elements", [e["id"] for e in stack], "invalid")
    else:
        sb.no_highlights(STACK)
    if balanced:
        sb.explanation = (
            "Success! All brackets are balanced. The stack is empty, meaning every opening "
            "bracket had a matching closing bracket."
        )
    else:
        sb.explanation = (
            "Failed! The stack is not empty, meaning there are unmatched opening brackets: "
            f"{', '.join(leftover)}."
        )
    sb.variables = {"finalResult": balanced, "isValid": balanced, "stackSize": len(stack),
                    "unmatchedBrackets": leftover, "totalPairs": len(matched_pairs),
                    "inputLength": len(text)}
    steps.append(sb.build(len(steps)))
    return steps

"""
Constants
Centralised storage for request kinds, the crash discriminant, and baseline defaults.
"""
# Requests the stress tester can issue against the code-intelligence service.
REQUEST_KINDS = (
    "editorOpen",
    "editorClose",
    "editorReplaceText",
    "cursorInfo",
    "codeComplete",
    "rangeInfo",
    "semanticRefactoring",
    "typeContextInfo",
    "conformingMethodList",
    "collectExpressionType",
)

# issueDetail discriminant for a crashed / abnormally exited service process
STRESS_TESTER_CRASH = "stressTesterCrash"

ISSUE_DETAIL_KINDS = REQUEST_KINDS + (STRESS_TESTER_CRASH,)

WILDCARD = "*"
INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

BASELINE_JSON_SUFFIXES = (".json",)
BASELINE_YAML_SUFFIXES = (".yaml", ".yml")

import copy
import sys
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


# One group (code "1"), one singlechoice question (code "g1q1"), two answers.
_SCENARIO_A = {
    "form": {
        "name": "Scenario A",
        "group_sort_order_field": "code",
        "groups": {
            "personal": {
                "code": "1",
                "name": "Personal details",
                "questions": {
                    "age": {
                        "code": "g1q1",
                        "type": "singlechoice",
                        "sort_order": 1,
                        "question": "How old are you?",
                        "answers": {
                            "young": {"code": "1", "answer": "Under 40", "default": "N", "sort_order": 1},
                            "old": {"code": "2", "answer": "40 or over", "default": "N", "sort_order": 2},
                        },
                    },
                },
            },
        },
    },
}


@pytest.fixture
def scenario_a():
    """A fresh, valid definition document that tests may mutate."""
    return copy.deepcopy(_SCENARIO_A)


@pytest.fixture
def age_question(scenario_a):
    """The single question body inside ``scenario_a``."""
    return scenario_a["form"]["groups"]["personal"]["questions"]["age"]

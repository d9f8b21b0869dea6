# facultyeval/models/__init__.py
from facultyeval.models.directory import Profile, Course, Section  # noqa: F401
from facultyeval.models.period import EvaluationPeriod  # noqa: F401
from facultyeval.models.rubric import RubricCategory, RubricItem  # noqa: F401
from facultyeval.models.assignment import EvaluatorAssignment  # noqa: F401
from facultyeval.models.evaluation import Evaluation, EvaluationResponse  # noqa: F401
from facultyeval.models.sentiment import StudentSentiment  # noqa: F401

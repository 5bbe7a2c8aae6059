"""Question use cases."""

from askfreely.application.use_cases.questions.submit_question import QuestionIntakeService

__all__ = ["QuestionIntakeService"]

from atscore.evaluation.base import BaseCriterionEvaluator
from atscore.evaluation.evaluator import CriterionEvaluator
from atscore.evaluation.factory import EvaluatorFactory
from atscore.evaluation.models import CategoryResult, JobContext
from atscore.evaluation.rule_based_evaluator import RuleBasedEvaluator

__all__ = [
    "BaseCriterionEvaluator",
    "CategoryResult",
    "CriterionEvaluator",
    "EvaluatorFactory",
    "JobContext",
    "RuleBasedEvaluator",
]

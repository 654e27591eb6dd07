from bilisp.evaluation.evaluator import evaluate, reduce_sexpr
from bilisp.evaluation.builtins import apply

__all__ = ["evaluate", "reduce_sexpr", "apply"]

from .decision_parser import parse_review_decision

__all__ = ["parse_review_decision"]

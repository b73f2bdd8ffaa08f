from kaptal.ai.prompts.monthly_summary import MONTHLY_SUMMARY_SYSTEM, MONTHLY_SUMMARY_USER

__all__ = [
    "MONTHLY_SUMMARY_SYSTEM",
    "MONTHLY_SUMMARY_USER",
]

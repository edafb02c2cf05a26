from .action_log import ActionLog, ActionCategory


__all__ = ["ActionLog", "ActionCategory"]

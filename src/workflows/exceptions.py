"""Workflow errors. API views answer them with HTTP 400."""


class WorkflowError(Exception):
    """Base class of workflow failures."""


class InvalidTransition(WorkflowError):
    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(f"Transition de statut invalide: {current} -> {target}")


class ActionError(WorkflowError):
    """An action could not be carried out (missing supplier, no manager...)."""

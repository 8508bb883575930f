class AdminAgentError(RuntimeError):
    pass


class AgentConfigurationError(AdminAgentError):
    pass


class AgentStartupError(AdminAgentError):
    pass


class SchemaSyncError(AdminAgentError):
    def __init__(self, message: str, status_code: int | None = None, body_text: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body_text = body_text

from app.admin_agent.agent import AdminAgent, create_agent
from app.admin_agent.auth import create_admin_token
from app.admin_agent.datasource import SqlAlchemyDatasource
from app.admin_agent.errors import AdminAgentError, AgentConfigurationError, AgentStartupError, SchemaSyncError
from app.admin_agent.options import AgentOptions

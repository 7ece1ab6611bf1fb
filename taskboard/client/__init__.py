from .api import APIError, TaskboardClient
from .state import AuthState, RequestState, RequestStatus, SessionState, TaskState
from .store import SessionStore

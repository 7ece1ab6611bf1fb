from .base import APIModel, MessageResponse, ErrorResponse
from .user import UserRegister, UserLogin, UserOut, UserResponse
from .tokens import AuthData, AuthResponse
from .task import TaskCreate, TaskUpdate, TaskOut, TaskResponse, TaskListResponse, TaskStats, TaskStatsResponse

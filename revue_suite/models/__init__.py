from revue_suite.models.revue import ApiResponseDTO, LoginRequest, RegisterUserRequest, RevueDTO

__all__ = ["ApiResponseDTO", "LoginRequest", "RegisterUserRequest", "RevueDTO"]

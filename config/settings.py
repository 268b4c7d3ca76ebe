"""
Application settings and configuration
"""

from dotenv import load_dotenv
from pydantic_settings import BaseSettings
from typing import List
load_dotenv()
class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application Configuration
    app_name: str = "InvPay Invoice Backend"
    app_host: str = "0.0.0.0"
    app_port: int = 8001
    debug: bool = True

    # Logging Configuration
    log_level: str = "INFO"
    log_file: str = "invpay_backend.log"

    # API Configuration
    api_prefix: str = "/api"
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    # Invoice defaults used when the prompt does not mention a field
    invoice_number_prefix: str = "INV"
    default_client_name: str = "Client Name"
    default_business_name: str = "Your Business"
    default_client_email: str = "client@example.com"
    default_business_email: str = "business@example.com"
    default_client_address: str = "123 Client Street\nCity, State 12345"
    default_business_address: str = "456 Business Avenue\nCity, State 67890"
    default_notes: str = "Thank you for your business!"
    default_service_description: str = "Professional Services"
    fallback_rate: float = 1000.0
    default_tax_rate: float = 0.0
    default_due_days: int = 30

    # Extraction tuning
    email_context_window: int = 50

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    def get_cors_origins(self) -> List[str]:
        """Get CORS origins as a list"""
        return [origin.strip() for origin in self.cors_origins.split(",")]

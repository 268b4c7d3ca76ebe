"""
Main Semantic Kernel service that hosts the invoice tools as a kernel plugin
"""

import semantic_kernel as sk
from semantic_kernel.functions import KernelArguments
import logging
from typing import Optional, Dict, Any, List

from config.settings import Settings
from tools.invoice_tools import InvoiceTools

INVOICE_PLUGIN_NAME = "invoice"


class SemanticKernelService:
    """
    Service class that manages the Semantic Kernel instance
    and exposes the invoice tools registered on it
    """

    def __init__(self, settings: Settings):
        """Initialize the Semantic Kernel service"""
        self.settings = settings
        self.kernel: Optional[sk.Kernel] = None
        self._initialized = False

        # Tool instances
        self.invoice_tools: Optional[InvoiceTools] = None

        self.logger = logging.getLogger(__name__)

    async def initialize(self) -> None:
        """Initialize Semantic Kernel and register the invoice plugin"""
        try:
            self.logger.info("Initializing Semantic Kernel service...")

            self.kernel = sk.Kernel()

            self.invoice_tools = InvoiceTools(self.settings)
            self.kernel.add_plugin(self.invoice_tools, plugin_name=INVOICE_PLUGIN_NAME)

            self._initialized = True
            self.logger.info(
                f"Semantic Kernel service initialized with functions: {', '.join(self.list_invoice_functions())}"
            )

        except Exception as e:
            self.logger.error(f"Failed to initialize Semantic Kernel service: {e}")
            raise

    def is_initialized(self) -> bool:
        """Check if the service is properly initialized"""
        return self._initialized and self.kernel is not None

    def list_invoice_functions(self) -> List[str]:
        """Names of the functions registered on the invoice plugin"""
        if not self.kernel or INVOICE_PLUGIN_NAME not in self.kernel.plugins:
            return []
        return sorted(self.kernel.plugins[INVOICE_PLUGIN_NAME].functions.keys())

    async def invoke_invoice_function(self, function_name: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """
        Invoke a function of the invoice plugin through the kernel

        Args:
            function_name: Registered kernel function name, e.g. "generate_invoice"
            arguments: Keyword arguments passed to the function

        Returns:
            The function's return value

        Raises:
            KeyError: If the function is not registered on the invoice plugin
        """
        if function_name not in self.list_invoice_functions():
            raise KeyError(f"Unknown invoice function: {function_name}")

        self.logger.info(f"Invoking {INVOICE_PLUGIN_NAME}.{function_name}")
        result = await self.kernel.invoke(
            plugin_name=INVOICE_PLUGIN_NAME,
            function_name=function_name,
            arguments=KernelArguments(**(arguments or {})),
        )
        return result.value if result is not None else None

    async def cleanup(self) -> None:
        """Cleanup resources"""
        try:
            self.logger.info("Cleaning up Semantic Kernel service...")
            self.kernel = None
            self.invoice_tools = None
            self._initialized = False
            self.logger.info("Semantic Kernel service cleaned up successfully")

        except Exception as e:
            self.logger.error(f"Error during cleanup: {e}")

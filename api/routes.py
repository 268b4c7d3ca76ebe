"""
FastAPI routes for invoice generation
Exposes the rule-based invoice extractor and the kernel plugin that hosts it
"""

from fastapi import APIRouter, HTTPException, Depends, Request
from pydantic import BaseModel, Field
from typing import Any, Dict
import json
import logging

from models.invoices import InvoiceRecord
from services.semantic_kernel_service import SemanticKernelService

# Configure logging
logger = logging.getLogger(__name__)

# Create routers
invoice_router = APIRouter(prefix="/invoices", tags=["Invoices"])
agent_router = APIRouter(prefix="/agent", tags=["AI Agents"])

EXAMPLE_PROMPTS = [
    "Create an invoice for web design services, $2500, due in 30 days to John Smith at john@email.com",
    "Invoice for Sarah Johnson (sarah@company.com) - 5 hours of consulting at $150/hour, 10% tax, due next week",
    "Bill to: Tech Solutions Inc, 3 days development work @ $500/day, plus 20% VAT, PO# TS-2024-001",
    "Social media management $1200/month for Creative Agency, address: 123 Main St, NYC, pay via bank transfer",
    "Logo design project: $800, client: Mike Wilson (mike@startup.com), 15% discount, due in 14 days",
    "Photography services - Wedding package $3500, Event coverage $1200, Photo editing $500, for Emma Davis",
]


class InvoiceGenerationRequest(BaseModel):
    """Request model for invoice generation"""
    prompt: str = Field(default="", description="Natural language description of the invoice")


class AgentInvokeRequest(BaseModel):
    """Request model for invoking an invoice plugin function"""
    function: str = Field(..., description="Kernel function name, e.g. generate_invoice")
    arguments: Dict[str, Any] = Field(default_factory=dict, description="Function arguments")


def get_sk_service(request: Request) -> SemanticKernelService:
    """Dependency to get Semantic Kernel service from app state"""
    sk_service = getattr(request.app.state, 'sk_service', None)
    if not sk_service or not sk_service.is_initialized():
        raise HTTPException(status_code=500, detail="Semantic Kernel service not initialized")
    return sk_service


@invoice_router.post("/generate", response_model=InvoiceRecord)
async def generate_invoice(
    request: InvoiceGenerationRequest,
    sk_service: SemanticKernelService = Depends(get_sk_service)
):
    """
    Generate an invoice from a natural language prompt

    Example request:
    ```json
    {
        "prompt": "Invoice for Sarah Johnson (sarah@company.com) - 5 hours of consulting at $150/hour, 10% tax, due next week"
    }
    ```
    """
    try:
        logger.info(f"Generating invoice from prompt: {request.prompt[:100]}...")
        return sk_service.invoice_tools.build_invoice(request.prompt)

    except Exception as e:
        logger.error(f"Invoice generation failed: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to generate invoice: {str(e)}")


@invoice_router.post("/recalculate", response_model=InvoiceRecord)
async def recalculate_invoice(
    invoice: InvoiceRecord,
    sk_service: SemanticKernelService = Depends(get_sk_service)
):
    """
    Recalculate amounts and totals of an invoice edited in the preview
    """
    try:
        return sk_service.invoice_tools.recalculate_invoice(invoice)

    except Exception as e:
        logger.error(f"Invoice recalculation failed: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to recalculate invoice: {str(e)}")


@invoice_router.get("/examples")
async def get_example_prompts():
    """Example prompts that exercise the extractor"""
    return {"examples": EXAMPLE_PROMPTS}


@agent_router.post("/invoke")
async def invoke_invoice_function(
    request: AgentInvokeRequest,
    sk_service: SemanticKernelService = Depends(get_sk_service)
):
    """
    Invoke a function of the invoice plugin through the kernel

    Example request:
    ```json
    {
        "function": "generate_invoice",
        "arguments": {"description": "Logo design project: $800, client: Mike Wilson"}
    }
    ```
    """
    if request.function not in sk_service.list_invoice_functions():
        raise HTTPException(status_code=404, detail=f"Unknown invoice function: {request.function}")

    try:
        result = await sk_service.invoke_invoice_function(request.function, request.arguments)

    except Exception as e:
        logger.error(f"Invoice function {request.function} failed: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to invoke {request.function}: {str(e)}")

    # Tool functions return JSON strings; pass structured data back when possible
    if isinstance(result, str):
        try:
            result = json.loads(result)
        except ValueError:
            pass

    # Tool functions report failures as {"error": ...} instead of raising
    if isinstance(result, dict) and "error" in result:
        logger.error(f"Invoice function {request.function} reported an error: {result['error']}")
        raise HTTPException(status_code=400, detail=result["error"])

    return {
        "success": True,
        "function": request.function,
        "result": result
    }


@agent_router.get("/health")
async def agent_health_check(sk_service: SemanticKernelService = Depends(get_sk_service)):
    """
    Check the health status of the invoice plugin
    """
    return {
        "status": "healthy" if sk_service.is_initialized() else "degraded",
        "semantic_kernel": sk_service.is_initialized(),
        "functions": sk_service.list_invoice_functions()
    }

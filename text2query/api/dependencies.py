from fastapi import Depends, Request

from text2query.conversion.gateway import ModelGateway
from text2query.conversion.orchestrator import ConversionOrchestrator


def get_gateway(request: Request) -> ModelGateway | None:
    # Built once in the app lifespan; absent if construction failed
    return getattr(request.app.state, "gateway", None)


def get_orchestrator(
    gateway: ModelGateway | None = Depends(get_gateway),
) -> ConversionOrchestrator:
    return ConversionOrchestrator(gateway=gateway)

from fastapi import APIRouter, Response
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

router = APIRouter(prefix="/metrics")

SEARCH_LATENCY = Histogram("storefront_search_latency_seconds", "Latency for product search")
SEARCH_MODE = Counter("storefront_search_mode_total", "Searches by the strategy that answered them", ["mode"])
CART_MUTATIONS = Counter("storefront_cart_mutations_total", "Cart mutations", ["op"])
PAYMENTS = Counter("storefront_payments_total", "Simulated payments", ["method", "outcome"])
ORDERS_CREATED = Counter("storefront_orders_created_total", "Orders persisted")
BACKEND_ERRORS = Counter("storefront_backend_errors_total", "Backend queries that failed and were served empty", ["query"])

@router.get("")
def metrics():
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)

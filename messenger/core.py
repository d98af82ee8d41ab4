import os
from prometheus_client import Counter, start_http_server
import logging

logger = logging.getLogger(__name__)

METRICS_PORT = int(os.getenv('METRICS_PORT', '8001'))

CHATS_SENT = Counter('personal_chats_sent_total', 'Personal chats stored')
CHATS_DELETED = Counter('personal_chats_deleted_total', 'Personal chats soft-deleted')
CHATS_MARKED_READ = Counter('personal_chats_marked_read_total', 'Personal chats flipped to read')

def init_metrics(port: int = METRICS_PORT):
    """Initialize Prometheus metrics server"""
    try:
        start_http_server(port)
        logger.info(f"Prometheus metrics server started on port {port}")
    except Exception as e:
        logger.warning(f'Prometheus start failed: {e}')

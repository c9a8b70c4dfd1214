from __future__ import annotations

import logging

from dependency_injector import containers, providers

from ..config.settings import AppConfig
from ..config.tokens import mask_token
from ..core.domain.models import RateWindow
from ..core.services.rate_limited_gate import RateLimitedGate
from ..core.usecases.submit_document import SubmitDocumentUseCase
from ..infra.document_submitter import HttpDocumentSubmitter, build_headers
from ..infra.http_client import HttpClient
from ..infra.rate_limiter import PermitPool, ReleaseScheduler

logger = logging.getLogger(__name__)


def http_client_resource(api_token, category_tag, timeout_seconds):
	"""Create the shared HTTP client with the fixed request headers and close it on shutdown."""
	logger.info("Initializing HTTP client")

	if api_token:
		logger.info(f"API token found: {mask_token(api_token)}")
	else:
		logger.warning("No API token configured - requests will be sent without an Authorization header")

	client = HttpClient(
		base_headers=build_headers(api_token, category_tag),
		timeout_seconds=timeout_seconds,
	)
	try:
		yield client
	finally:
		logger.debug("Closing HTTP client")
		client.close()


def release_scheduler_resource(workers):
	logger.info(f"Starting release scheduler with {workers} worker(s)")
	scheduler = ReleaseScheduler(workers=workers).start()
	try:
		yield scheduler
	finally:
		logger.debug(f"Stopping release scheduler ({scheduler.pending()} release(s) pending)")
		scheduler.shutdown()


class Container(containers.DeclarativeContainer):
	config = providers.Configuration(pydantic_settings=[AppConfig()])

	http_client = providers.Resource(
		http_client_resource,
		api_token=config.api_token,
		category_tag=config.category_tag,
		timeout_seconds=config.timeout_seconds,
	)

	submitter = providers.Factory(
		HttpDocumentSubmitter,
		http_client=http_client,
		endpoint_url=config.endpoint_url,
	)

	# The gate owns exactly one pool and one scheduler for its whole lifetime
	permit_pool = providers.Singleton(PermitPool, capacity=config.request_limit)

	release_scheduler = providers.Resource(
		release_scheduler_resource,
		workers=config.release_workers,
	)

	rate_window = providers.Singleton(RateWindow, unit=config.time_unit)

	gate = providers.Singleton(
		RateLimitedGate,
		pool=permit_pool,
		scheduler=release_scheduler,
		window=rate_window,
		max_in_flight=config.max_in_flight,
	)

	submit_uc = providers.Factory(SubmitDocumentUseCase, gate=gate, submitter=submitter)

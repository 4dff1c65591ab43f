"""
Service providers for FastAPI routes

Each service is built from Settings once per process; tests swap them with
app.dependency_overrides.
"""
from functools import lru_cache

from fastapi import Depends

from careerquest.config import get_settings
from careerquest.services.onet_catalog import OnetCatalogClient
from careerquest.services.onet_proxy import OnetProxy
from careerquest.services.roadmap_generator import RoadmapGenerator


@lru_cache()
def get_onet_proxy() -> OnetProxy:
    return OnetProxy(get_settings())


def get_catalog_client(proxy: OnetProxy = Depends(get_onet_proxy)) -> OnetCatalogClient:
    return OnetCatalogClient(proxy)


@lru_cache()
def get_roadmap_generator() -> RoadmapGenerator:
    return RoadmapGenerator(get_settings())

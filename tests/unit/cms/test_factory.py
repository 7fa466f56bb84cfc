"""
Tests for content manager selection.
"""

import pytest

from storefront.cms import factory
from storefront.cms.errors import ConfigurationError
from storefront.cms.local import LocalContentAssetsManager
from storefront.config.settings import CMSSettings


@pytest.fixture(autouse=True)
def reset_manager():
    factory.reset_content_manager()
    yield
    factory.reset_content_manager()


def test_local_backend(tmp_path):
    settings = CMSSettings(method="LOCAL", local_root=str(tmp_path))

    manager = factory.create_content_manager(settings)

    assert isinstance(manager, LocalContentAssetsManager)
    assert manager.root == tmp_path.resolve()


def test_unknown_backend():
    with pytest.raises(ConfigurationError):
        factory.create_content_manager(CMSSettings(method="infinispan"))


def test_cloud_backends_need_a_bucket():
    with pytest.raises(ConfigurationError):
        factory.create_content_manager(CMSSettings(method="aws", aws_bucket=None))
    with pytest.raises(ConfigurationError):
        factory.create_content_manager(CMSSettings(method="gcp", gcp_bucket=None))


def test_singleton(tmp_path):
    settings = CMSSettings(method="local", local_root=str(tmp_path))

    first = factory.get_content_manager(settings)
    second = factory.get_content_manager()

    assert first is second
    factory.reset_content_manager()
    assert factory.get_content_manager(settings) is not first

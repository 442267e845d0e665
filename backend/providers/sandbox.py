# providers/sandbox.py

from dataclasses import dataclass
from typing import Optional, Tuple

from providers.base import PlaybackRequest
from providers.registry import ProviderDescriptor

IFRAME_ALLOW = "encrypted-media; autoplay; fullscreen"
AD_RISK_ADVISORY = "This player may contain ads"


@dataclass(frozen=True)
class EmbedView:
    """
    Everything needed to render the embedding surface for one provider and
    request. ``sandbox`` is None when the iframe must carry no sandbox
    attribute at all.
    """

    provider: str
    src: str
    sandbox: Optional[str]
    allow: str = IFRAME_ALLOW
    advisory: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "provider": self.provider,
            "src": self.src,
            "sandbox": self.sandbox,
            "allow": self.allow,
            "advisory": self.advisory,
        }


def permissions_for(descriptor: ProviderDescriptor) -> Optional[Tuple[str, ...]]:
    if descriptor.sandbox is None:
        return None
    return tuple(descriptor.sandbox)


def sandbox_attribute(descriptor: ProviderDescriptor) -> Optional[str]:
    permissions = permissions_for(descriptor)
    if permissions is None:
        return None
    return " ".join(permissions)


def requires_advisory(descriptor: ProviderDescriptor) -> bool:
    # An unrestricted surface is always the weaker posture, ad-risk or not.
    return descriptor.has_ads or not descriptor.is_sandboxed


def build_embed_view(descriptor: ProviderDescriptor, request: PlaybackRequest) -> EmbedView:
    return EmbedView(
        provider=descriptor.key,
        src=descriptor.build_url(request),
        sandbox=sandbox_attribute(descriptor),
        advisory=AD_RISK_ADVISORY if requires_advisory(descriptor) else None,
    )

"""Request authentication."""

from .auth_gate import JWTAuthGate, Principal, parse_bearer_token

__all__ = ["JWTAuthGate", "Principal", "parse_bearer_token"]

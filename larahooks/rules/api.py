"""Rules for API-only Laravel projects."""

from __future__ import annotations

from typing import Tuple

from ..models import Severity
from .base import AdvisoryRule, CheckRule

CONTROLLER_PATHS = ("*app/Http/Controllers/*",)
REQUEST_PATHS = ("*app/Http/Requests/*",)

API_RULES: Tuple[CheckRule, ...] = (
    AdvisoryRule(
        "api.controller-view",
        "API controller returning a view; consider returning JSON",
        present=(r"return view\(",),
        paths=CONTROLLER_PATHS,
    ),
    AdvisoryRule(
        "api.json-without-resource",
        "Consider using API Resources for consistent responses",
        present=(r"return response\(\)->json",),
        absent=(r"(Resource::|JsonResource|->toArray\(\))",),
        paths=CONTROLLER_PATHS,
    ),
    AdvisoryRule(
        "api.json-status-code",
        "Consider specifying HTTP status codes in API responses",
        present=(r"return response\(\)->json\([^,)]+\)",),
        paths=CONTROLLER_PATHS,
    ),
    AdvisoryRule(
        "api.route-versioning",
        "Consider implementing API versioning",
        absent=(r"(prefix\(['\"]v[0-9]|group\(.*/v[0-9])",),
        paths=("routes/api.php",),
    ),
    AdvisoryRule(
        "api.route-resource",
        "Consider using Route::apiResource for RESTful routes",
        present=(r"Route::",),
        absent=(r"apiResource",),
        paths=("routes/api.php",),
    ),
    AdvisoryRule(
        "api.request-authorize",
        "Missing authorize() method in Form Request",
        absent=(r"public function authorize",),
        paths=REQUEST_PATHS,
    ),
    AdvisoryRule(
        "api.request-messages",
        "Consider adding custom error messages for API validation",
        absent=(r"public function messages",),
        paths=REQUEST_PATHS,
    ),
    AdvisoryRule(
        "api.resource-to-array",
        "Missing toArray() method in API Resource",
        present=(r"extends JsonResource",),
        absent=(r"public function toArray",),
        severity=Severity.ERROR,
        paths=("*app/Http/Resources/*",),
    ),
    AdvisoryRule(
        "api.rate-limiting",
        "Consider implementing API rate limiting",
        absent=(r"throttle:api",),
        paths=("app/Http/Kernel.php",),
    ),
    AdvisoryRule(
        "api.exception-json",
        "Consider adding API-specific exception handling",
        absent=(r"(expectsJson|wantsJson)",),
        paths=("app/Exceptions/Handler.php",),
    ),
)

__all__ = ["API_RULES"]

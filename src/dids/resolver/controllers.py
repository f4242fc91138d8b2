from time import perf_counter

from django.apps import apps
from django.http import JsonResponse
from ninja_extra import api_controller, route

from src.dids.utils.ids import method_of


def _wants_resolution(accept: str) -> bool:
    acc = (accept or "").lower()
    return "application/did-resolution+json" in acc


@api_controller("/universal-resolver", tags=["DID Resolver"], auth=None)
class ResolverController:
    @route.get("/identifiers/{identifier}")
    def resolve(self, request, identifier: str):
        accept = request.headers.get("Accept", "")
        t0 = perf_counter()
        # NOT_FOUND / UNAVAILABLE propagate to the API exception handlers
        doc, local = apps.get_app_config("dids").resolver.resolve_with_source(identifier)
        total_ms = int((perf_counter() - t0) * 1000)

        if not _wants_resolution(accept):
            return JsonResponse(doc, status=200, content_type="application/did+json")

        try:
            method = method_of(identifier)
        except ValueError:
            method = "Not available"

        doc_meta = {"contentType": "application/did+json"}
        if local is not None:
            doc_meta.update(
                {
                    "versionId": str(local.sequence),
                    "created": local.created_at.isoformat() if local.created_at else None,
                    "source": "registry",
                }
            )
        else:
            doc_meta["source"] = "identity-agent"

        res = {
            "didDocument": doc,
            "didDocumentMetadata": doc_meta,
            "didResolutionMetadata": {
                "contentType": "application/did-resolution+json",
                "duration": total_ms,
                "did": {"didString": identifier, "method": method},
            },
        }
        return JsonResponse(res, status=200, content_type="application/did-resolution+json")

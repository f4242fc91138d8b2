from src.dids.did_document_compiler.builders import order_did_document


def version_to_dto(version) -> dict:
    return {
        "id": str(version.id),
        "did": version.identity,
        "version": version.sequence,
        "is_active": version.is_active,
        "owner": version.owner,
        "created_at": version.created_at.isoformat() if version.created_at else None,
        "document": order_did_document(version.payload or {}),
    }


def owned_to_list_dto(version) -> dict:
    return {
        "did": version.identity,
        "version": version.sequence,
        "created_at": version.created_at.isoformat() if version.created_at else None,
    }


def history_to_dto(versions) -> dict:
    return {
        "did": versions[0].identity if versions else None,
        "count": len(versions),
        "versions": [version_to_dto(v) for v in versions],
    }

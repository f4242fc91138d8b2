from ninja_extra import NinjaExtraAPI

from src.api.exception_handler import attach_exception_handlers
from src.dids.apis import DIDController
from src.dids.resolver.controllers import ResolverController


api = NinjaExtraAPI(title="DID Version Registry API", version="1.0.0", csrf=False)

# Register exception handlers in one place
attach_exception_handlers(api)

api.register_controllers(
    DIDController,
    ResolverController,
)

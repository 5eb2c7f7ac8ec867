# =============================================================================
# core/catalog.py  —  Route Catalogue
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Declares the Mimi Panda endpoints this server knows about, with their
#   input and output schemas, and filters them for list_api_routes.
#
# DOCUMENTATION, NOT ENFORCEMENT:
#   call_api accepts any path and any body.  The catalogue tells the agent
#   what the remote API expects; it is never used to reject a call.
#
# The option tuples below mirror the remote API exactly.  If the API adds a
# preset, it has to be added here too.
# =============================================================================

from typing import Any

from core.models import RouteDescriptor, RouteListing
from core.schema import (
    AnySchema,
    ArraySchema,
    BooleanSchema,
    EnumSchema,
    LiteralSchema,
    NumberSchema,
    ObjectSchema,
    RecordSchema,
    StringSchema,
    UnionSchema,
)
from core.summarizer import summarize_schema

# -----------------------------------------------------------------------------
# Option sets
# -----------------------------------------------------------------------------
COLORING_V2_TYPES = ("v2_general", "v2_detailed", "v2_anime", "v2_simplified", "v2_comic")
COLORING_V1_TYPES = ("for_adults", "for_kids", "simple", "image", "photo", "sketching")
COLORING_TYPE_OPTIONS = tuple(dict.fromkeys(COLORING_V2_TYPES + COLORING_V1_TYPES))
COLORING_VERSIONS = ("v1", "v2")

PBN_SEGMENT_COMPLEXITIES = ("none", "level1", "level2", "level3", "simplest")
PBN_GRADIENT_STEPS = ("high", "normal")
PBN_COLOR_PRECISIONS = ("high", "normal", "low", "lowest")
PBN_DETAILS_FILTERS = ("ultra", "high", "normal", "low", "lowest")
PBN_MODES = ("pixel", "polygon")

AI_FILTER_TYPES = (
    "none",
    "painting-general",
    "painting-oil-painting",
    "painting-palette-knife",
    "painting-acrylic",
    "painting-watercolor",
    "painting-gouache",
    "painting-digital",
    "painting-graffiti",
    "painting-grimdark",
    "painting-impasto",
    "painting-impressionism-painting-style",
    "painting-magic-realism",
    "painting-pointillism",
    "painting-renaissance",
    "painting-retrofuturism",
)
AI_COLORING_ASPECT_RATIOS = ("1x1", "2x3", "3x2", "4x3", "3x4", "9x16", "16x9")
AI_COLORING_STYLES = ("simple_coloring_page", "detailed_coloring_page", "realistic_coloring_page")
AI_COLORING_VERSIONS = ("v1", "v2")
AI_IMAGE_ASPECT_RATIOS = ("1x1", "2x3", "3x2", "4x5", "5x4")
AI_FILTER_STRENGTH_VALUES = (0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0)

# -----------------------------------------------------------------------------
# Shared schemas
# -----------------------------------------------------------------------------
IMAGE_OR_URL_SCHEMA = StringSchema(
    description=(
        "Image upload (multipart file field) or publicly accessible URL. "
        "Accepted formats: jpg, png, webp, jpeg, heic, heif. Maximum size: 20MB. "
        "Maximum dimensions: 15000x15000px or 4000x4000px for upscale."
    )
)

PROMPT_SCHEMA = StringSchema(min_length=3, max_length=600, description="Text prompt for generation.")

NO_BODY_SCHEMA = ObjectSchema(description="No body parameters; requires Authorization header.")

TASK_CREATION_OUTPUT_SCHEMA = ObjectSchema(fields={
    "key": StringSchema(description="API key used to poll task results via /service/item/{uuid}"),
    "status": StringSchema(description="Current task status"),
    "created": StringSchema(description="Creation timestamp (ISO 8601)"),
})

_URL_OR_NULL = StringSchema(format="url").nullable()

# -----------------------------------------------------------------------------
# The catalogue (declaration order is the listing order)
# -----------------------------------------------------------------------------
API_ROUTES: tuple[RouteDescriptor, ...] = (
    RouteDescriptor(
        method="POST",
        path="auth/login",
        description="Authenticate a user and receive a API access token.",
        auth_required=False,
        group="auth",
        notes="Public route.",
        input_schema=ObjectSchema(fields={
            "email": StringSchema(format="email", description="Registered email address"),
            "password": StringSchema(min_length=1, description="Account password"),
        }),
        output_schema=ObjectSchema(fields={
            "token": StringSchema(description="Plain text API access token"),
            "userId": NumberSchema(description="Internal user identifier"),
            "plan": StringSchema(description="Current subscription tier"),
            "credits": NumberSchema(description="Available credits balance"),
        }),
    ),
    RouteDescriptor(
        method="GET",
        path="user/me",
        description="Return the authenticated user profile.",
        auth_required=True,
        group="auth",
        input_schema=NO_BODY_SCHEMA,
        output_schema=ObjectSchema(fields={
            "id": NumberSchema(description="Authenticated user ID"),
            "email": StringSchema(format="email", description="User email"),
            "plan": StringSchema(description="Subscription plan identifier"),
            "credits": NumberSchema(description="Current credits balance"),
        }),
    ),
    RouteDescriptor(
        method="POST",
        path="user/logout",
        description="Invalidate the current Sanctum token.",
        auth_required=True,
        group="auth",
        input_schema=NO_BODY_SCHEMA,
        output_schema=ObjectSchema(fields={
            "message": StringSchema(description="Confirmation that all tokens were revoked"),
        }),
    ),
    RouteDescriptor(
        method="POST",
        path="service/coloring",
        description="Create a coloring page from an uploaded image.",
        auth_required=True,
        group="service",
        input_schema=ObjectSchema(fields={
            "image": IMAGE_OR_URL_SCHEMA,
            "type": EnumSchema(values=COLORING_TYPE_OPTIONS).optional().describe(
                "Optional coloring style. Defaults to v2_general for version=v2, "
                "for_adults for version=v1."
            ),
            "version": EnumSchema(values=COLORING_VERSIONS).optional().describe(
                "Processing pipeline version. Defaults to v2."
            ),
        }),
        output_schema=TASK_CREATION_OUTPUT_SCHEMA,
    ),
    RouteDescriptor(
        method="POST",
        path="service/pbn",
        description="Create a paint by numbers image from an upload or prompt.",
        auth_required=True,
        group="service",
        input_schema=ObjectSchema(fields={
            "image": IMAGE_OR_URL_SCHEMA.optional().describe("Optional image upload or URL."),
            "prompt": StringSchema(min_length=3, max_length=600).optional().describe(
                "Optional text prompt (required if image omitted)."
            ),
            "numberOfColors": NumberSchema(integer=True, minimum=7, maximum=100).optional().describe(
                "Desired palette size (7-100). Defaults to 30."
            ),
            "segmentsComplexity": EnumSchema(values=PBN_SEGMENT_COMPLEXITIES).optional().describe(
                "Level of segmentation detail. Defaults to none."
            ),
            "gradientStep": EnumSchema(values=PBN_GRADIENT_STEPS).optional().describe(
                "Gradient smoothing level. Defaults to high."
            ),
            "colorPrecision": EnumSchema(values=PBN_COLOR_PRECISIONS).optional().describe(
                "Change it only for high contrast pictures. This parameter might lead to the "
                "colors number decrease and merging colors zones - fewer details. "
                "Defaults to high."
            ),
            "canvasSize": StringSchema().optional().describe(
                "Target canvas dimensions string in inches. Your Paint by Numbers image will be "
                "resized to make the coloring process easier for the selected canvas size. "
                "The canvas orientation will be automatically adjusted to match the image "
                "orientation. Example: 4x8"
            ),
            "crop": BooleanSchema().optional().describe(
                "Whether to crop input image to fit the selected canvas size."
            ),
            "detailsFilter": EnumSchema(values=PBN_DETAILS_FILTERS).optional().describe(
                "Discard small image patches. The higher value, the more details will be "
                "preserved. Defaults to normal."
            ),
            "palette": NumberSchema(integer=True).optional().describe(
                "Palette ID owned by the user (premium only)."
            ),
            "paletteColors": StringSchema().optional().describe(
                'Comma-separated palette color codes to restrict output. For instance, "1,2,3,4,5".'
            ),
            "aiFilterType": EnumSchema(values=AI_FILTER_TYPES).optional().describe(
                "Optional AI style filter. Defaults to none."
            ),
            "minArea": NumberSchema(integer=True, minimum=0, maximum=100).optional().describe(
                "The minimum size (as a percentage of the shortest side of your image) that a "
                "color region must be to remain separate. Increasing this value will combine "
                "smaller color regions into larger ones. Default is Auto - automatically detect "
                "the minimum size. 0% means no merging."
            ),
            "mode": EnumSchema(values=PBN_MODES).optional().describe(
                "Segmentation output mode. Defaults to polygon."
            ),
            "enhancement": BooleanSchema().optional().describe(
                "Enable smart enhancement technique to remove unnecessary details and improve "
                "the overall quality of the image (default true)."
            ),
        }).refine("Provide either image or prompt."),
        output_schema=TASK_CREATION_OUTPUT_SCHEMA,
    ),
    RouteDescriptor(
        method="POST",
        path="service/ai/coloring",
        description="Generate an AI-powered coloring page from a prompt.",
        auth_required=True,
        group="service",
        input_schema=ObjectSchema(fields={
            "prompt": PROMPT_SCHEMA,
            "style": EnumSchema(
                values=AI_COLORING_STYLES, description="Preset style slug supplied by provider."
            ),
            "aspectRatio": EnumSchema(
                values=AI_COLORING_ASPECT_RATIOS, description="Canvas aspect ratio."
            ),
            "version": EnumSchema(
                values=AI_COLORING_VERSIONS, description="Provider version to use."
            ),
        }),
        output_schema=TASK_CREATION_OUTPUT_SCHEMA,
    ),
    RouteDescriptor(
        method="POST",
        path="service/ai/image",
        description="Generate AI images from a text prompt.",
        auth_required=True,
        group="service",
        input_schema=ObjectSchema(fields={
            "prompt": PROMPT_SCHEMA,
            "aspectRatio": EnumSchema(
                values=AI_IMAGE_ASPECT_RATIOS, description="Canvas aspect ratio."
            ),
        }),
        output_schema=TASK_CREATION_OUTPUT_SCHEMA,
    ),
    RouteDescriptor(
        method="POST",
        path="service/image/upscale",
        description=(
            "Enhance or upscale uploaded images. Maximum dimensions are 4000x4000 pixels."
        ),
        auth_required=True,
        group="service",
        input_schema=ObjectSchema(fields={
            "image": IMAGE_OR_URL_SCHEMA,
            "upscale": EnumSchema(values=("2", "4"))
            .or_(LiteralSchema(value=2))
            .or_(LiteralSchema(value=4))
            .describe("Desired upscale factor (2x or 4x)."),
        }),
        output_schema=TASK_CREATION_OUTPUT_SCHEMA,
    ),
    RouteDescriptor(
        method="POST",
        path="service/image/filter",
        description="Apply AI-based filters to uploaded images.",
        auth_required=True,
        group="service",
        input_schema=ObjectSchema(fields={
            "image": IMAGE_OR_URL_SCHEMA,
            "filterType": EnumSchema(values=AI_FILTER_TYPES, description="AI filter preset."),
            "strength": NumberSchema(
                description="Effect strength multiplier. Allowed values: "
                + ", ".join(str(value) for value in AI_FILTER_STRENGTH_VALUES)
                + ".",
            ).refine("Strength must be between 0.2 and 1.0 (step 0.1)."),
        }),
        output_schema=TASK_CREATION_OUTPUT_SCHEMA,
    ),
    RouteDescriptor(
        method="GET",
        path="service/item/{uuid}",
        description="Retrieve a generated item by its UUID.",
        auth_required=True,
        group="service",
        input_schema=ObjectSchema(fields={
            "uuid": StringSchema(format="uuid", description="Task key returned by creation endpoints."),
        }),
        output_schema=ObjectSchema(fields={
            "key": StringSchema(description="Echo of supplied UUID key"),
            "status": StringSchema(description="Current processing status"),
            "created": StringSchema(description="Creation timestamp (Y-m-d H:i:s)"),
            "updated": StringSchema(description="Last update timestamp (Y-m-d H:i:s)"),
            "images": UnionSchema(options=(
                ArraySchema(element=_URL_OR_NULL),
                RecordSchema(
                    value=UnionSchema(options=(_URL_OR_NULL, ArraySchema(element=_URL_OR_NULL).nullable()))
                ).nullable(),
                _URL_OR_NULL,
            )).optional().describe("Resulting asset URLs (varies by task type)."),
            "colors": AnySchema().optional().describe("Palette metadata for PBN outputs."),
            "parameters": RecordSchema(value=AnySchema()).optional().describe(
                "Task-specific parameter echo."
            ),
        }),
    ),
)


def list_routes(filter: str | None = None, group: str | None = None) -> RouteListing:
    """Filter the catalogue, keeping declaration order.

    Args:
        filter: Case-insensitive substring matched against method, path,
                description and group.
        group: Case-insensitive exact match on the route group.

    Both constraints apply together; a missing one imposes nothing.
    """
    needle = filter.lower() if filter else None
    wanted_group = group.lower() if group else None

    matched = []
    for route in API_ROUTES:
        route_group = (route.group or "").lower()
        if wanted_group is not None and route_group != wanted_group:
            continue
        if needle is not None and not any(
            needle in field.lower()
            for field in (route.method, route.path, route.description or "", route_group)
        ):
            continue
        matched.append(route)
    return RouteListing(routes=matched)


def route_summary(route: RouteDescriptor) -> dict[str, Any]:
    """Structured view of one route, as returned by list_api_routes."""
    input_summary = summarize_schema(route.input_schema)
    output_summary = summarize_schema(route.output_schema)
    return {
        "method": route.method,
        "path": route.path,
        "description": route.description,
        "authRequired": route.auth_required,
        "group": route.group,
        "notes": route.notes,
        "inputSchema": input_summary.to_dict() if input_summary else None,
        "outputSchema": output_summary.to_dict() if output_summary else None,
    }

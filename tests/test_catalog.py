from core.catalog import (
    AI_FILTER_STRENGTH_VALUES,
    API_ROUTES,
    COLORING_TYPE_OPTIONS,
    list_routes,
    route_summary,
)

SERVICE_PATHS = [
    "service/coloring",
    "service/pbn",
    "service/ai/coloring",
    "service/ai/image",
    "service/image/upscale",
    "service/image/filter",
    "service/item/{uuid}",
]


def _find(path):
    return next(route for route in API_ROUTES if route.path == path)


class TestCatalogue:
    def test_method_path_pairs(self):
        assert [(r.method, r.path) for r in API_ROUTES] == [
            ("POST", "auth/login"),
            ("GET", "user/me"),
            ("POST", "user/logout"),
            ("POST", "service/coloring"),
            ("POST", "service/pbn"),
            ("POST", "service/ai/coloring"),
            ("POST", "service/ai/image"),
            ("POST", "service/image/upscale"),
            ("POST", "service/image/filter"),
            ("GET", "service/item/{uuid}"),
        ]

    def test_only_login_is_public(self):
        public = [r.path for r in API_ROUTES if not r.auth_required]
        assert public == ["auth/login"]

    def test_coloring_types_cover_both_generations(self):
        assert COLORING_TYPE_OPTIONS[:5] == (
            "v2_general", "v2_detailed", "v2_anime", "v2_simplified", "v2_comic"
        )
        assert COLORING_TYPE_OPTIONS[5:] == (
            "for_adults", "for_kids", "simple", "image", "photo", "sketching"
        )

    def test_strength_values(self):
        assert AI_FILTER_STRENGTH_VALUES == (0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0)


class TestListRoutes:
    def test_no_filters_returns_everything(self):
        listing = list_routes()
        assert listing.total == len(API_ROUTES) == 10

    def test_group_service(self):
        listing = list_routes(group="service")
        assert [r.path for r in listing.routes] == SERVICE_PATHS
        assert listing.total == 7

    def test_group_is_exact_and_case_insensitive(self):
        assert list_routes(group="AUTH").total == 3
        assert list_routes(group="serv").total == 0

    def test_filter_pbn(self):
        listing = list_routes(filter="pbn")
        assert [(r.method, r.path) for r in listing.routes] == [("POST", "service/pbn")]
        assert listing.total == 1

    def test_filter_matches_method_case_insensitively(self):
        paths = [r.path for r in list_routes(filter="get").routes]
        assert paths == ["user/me", "service/item/{uuid}"]

    def test_filter_and_group_are_conjunctive(self):
        listing = list_routes(filter="GET", group="auth")
        assert [r.path for r in listing.routes] == ["user/me"]

    def test_no_match(self):
        listing = list_routes(filter="does-not-exist")
        assert listing.routes == []
        assert listing.total == 0


class TestRouteSummary:
    def test_structured_fields(self):
        summary = route_summary(_find("auth/login"))
        assert summary["method"] == "POST"
        assert summary["authRequired"] is False
        assert summary["notes"] == "Public route."
        assert list(summary["inputSchema"]["properties"]) == ["email", "password"]
        assert summary["outputSchema"]["properties"]["userId"]["type"] == "number"

    def test_missing_notes_is_null(self):
        assert route_summary(_find("user/me"))["notes"] is None

    def test_pbn_enums_are_exposed(self):
        properties = route_summary(_find("service/pbn"))["inputSchema"]["properties"]
        assert properties["segmentsComplexity"]["enumValues"] == [
            "none", "level1", "level2", "level3", "simplest"
        ]
        assert properties["mode"]["enumValues"] == ["pixel", "polygon"]
        assert properties["mode"]["optional"] is True
        assert properties["mode"]["description"] == "Segmentation output mode. Defaults to polygon."

    def test_item_images_union(self):
        images = route_summary(_find("service/item/{uuid}"))["outputSchema"]["properties"]["images"]
        assert images["type"] == "union"
        assert images["optional"] is True
        assert [option["type"] for option in images["unionOptions"]] == ["array", "record", "string"]
        assert images["unionOptions"][1]["nullable"] is True

    def test_upscale_accepts_strings_and_literals(self):
        upscale = route_summary(_find("service/image/upscale"))["inputSchema"]["properties"]["upscale"]
        assert upscale["description"] == "Desired upscale factor (2x or 4x)."
        assert [option.get("enumValues") for option in upscale["unionOptions"]] == [
            ["2", "4"], ["2"], ["4"]
        ]

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class BackOfficePagination(PageNumberPagination):
    """Page-number pages; the client may shrink or grow them with ``page_size``."""

    page_size = 25
    page_size_query_param = "page_size"
    max_page_size = 200

    def get_paginated_response(self, data):
        return Response({
            "count": self.page.paginator.count,
            "total_pages": self.page.paginator.num_pages,
            "next": self.get_next_link(),
            "previous": self.get_previous_link(),
            "results": data,
        })

    def get_paginated_response_schema(self, schema):
        response_schema = super().get_paginated_response_schema(schema)
        response_schema["properties"]["total_pages"] = {"type": "integer", "example": 1}
        return response_schema

from rest_framework.pagination import PageNumberPagination


class CataloguePagination(PageNumberPagination):
    """
    Page-number pagination for the service catalogue.

    The catalogue grid shows three cards per row, so the default page holds four rows.
    Clients may ask for a different size with `?page_size=`, e.g. /api/services/?page_size=6.
    """
    page_size = 12
    page_size_query_param = 'page_size'
    max_page_size = 60

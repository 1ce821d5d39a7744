import logging

from drf_spectacular.utils import OpenApiExample, OpenApiParameter, OpenApiResponse, OpenApiTypes, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from common.schema import DeletedOut, ErrorOut, MessageOut

from . import services
from .serializers import CreateIndexIn, UserDocumentSerializer

log = logging.getLogger(__name__)

UPSERT_OK = "User added or updated successfully."
UPSERT_FAILED = "Error adding or updating User"

_USER_EXAMPLE = OpenApiExample("Request example", value={"key": "u1", "name": "Alice", "email": "alice@example.com"}, request_only=True)
_KEY_PARAM = OpenApiParameter(name="key", location=OpenApiParameter.PATH, type=OpenApiTypes.STR, description="User document key")


def _upsert_response(request):
    s = UserDocumentSerializer(data=request.data)
    s.is_valid(raise_exception=True)

    if services.add_or_update(dict(s.validated_data)):
        return Response({"message": UPSERT_OK})
    return Response({"detail": UPSERT_FAILED}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


class UserViewSet(viewsets.ViewSet):
    serializer_class = UserDocumentSerializer

    @extend_schema(
        tags=["Users"],
        summary="Create a collection if absent",
        description="Creates the named collection in the search engine. Calling it again for an existing collection is a no-op.",
        operation_id="users_create_index",
        request=None,
        parameters=[OpenApiParameter(name="indexName", location=OpenApiParameter.QUERY, required=True, type=OpenApiTypes.STR, description="Collection name")],
        responses={200: OpenApiResponse(response=MessageOut), 400: OpenApiResponse(description="indexName missing")},
    )
    @action(detail=False, methods=["post"], url_path="create-index")
    def create_index(self, request):
        params = CreateIndexIn(data=request.query_params)
        params.is_valid(raise_exception=True)

        name = params.validated_data["indexName"]
        services.create_index(name)
        return Response({"message": f"Index {name} created or already exists."})

    @extend_schema(
        tags=["Users"],
        summary="Add a user",
        description="Upserts the document under its `key`; an existing document is replaced as a whole.",
        operation_id="users_add",
        request=UserDocumentSerializer,
        responses={200: OpenApiResponse(response=MessageOut), 400: OpenApiResponse(description="Malformed document"), 500: OpenApiResponse(response=ErrorOut)},
        examples=[_USER_EXAMPLE],
    )
    @action(detail=False, methods=["post"], url_path="add-user")
    def add_user(self, request):
        return _upsert_response(request)

    @extend_schema(
        tags=["Users"],
        summary="Update a user",
        description="Same upsert as add-user: the stored document is replaced by the request body.",
        operation_id="users_update",
        request=UserDocumentSerializer,
        responses={200: OpenApiResponse(response=MessageOut), 400: OpenApiResponse(description="Malformed document"), 500: OpenApiResponse(response=ErrorOut)},
        examples=[_USER_EXAMPLE],
    )
    @action(detail=False, methods=["post"], url_path="update-user")
    def update_user(self, request):
        return _upsert_response(request)

    @extend_schema(
        tags=["Users"],
        summary="Fetch a user by key",
        operation_id="users_get",
        parameters=[_KEY_PARAM],
        responses={200: OpenApiResponse(response=UserDocumentSerializer), 404: OpenApiResponse(response=ErrorOut)},
    )
    @action(detail=False, methods=["get"], url_path=r"get-user/(?P<key>[^/]+)")
    def get_user(self, request, key=None):
        doc = services.get_user(key)
        if doc is None:
            return Response({"detail": "Not Found!"}, status=status.HTTP_404_NOT_FOUND)
        return Response(UserDocumentSerializer(doc).data)

    @extend_schema(
        tags=["Users"],
        summary="Fetch every user",
        operation_id="users_list",
        responses={200: OpenApiResponse(response=UserDocumentSerializer(many=True)), 500: OpenApiResponse(response=ErrorOut)},
    )
    @action(detail=False, methods=["get"], url_path="get-all-user")
    def get_all_user(self, request):
        docs = services.get_all_users()
        if docs is None:
            return Response({"detail": "Error retrieving the users"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(UserDocumentSerializer(docs, many=True).data)

    @extend_schema(
        tags=["Users"],
        summary="Delete a user by key",
        operation_id="users_delete",
        parameters=[_KEY_PARAM],
        responses={200: OpenApiResponse(response=MessageOut), 500: OpenApiResponse(response=ErrorOut)},
    )
    @action(detail=False, methods=["delete"], url_path=r"delete-user/(?P<key>[^/]+)")
    def delete_user(self, request, key=None):
        if services.delete_user(key):
            return Response({"message": "User deleted successfully"})
        return Response({"detail": "Error occurred while deleting the user."}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    @extend_schema(
        tags=["Users"],
        summary="Delete every user",
        description="Removes all documents from the default collection; the collection itself is kept.",
        operation_id="users_delete_all",
        responses={200: OpenApiResponse(response=DeletedOut), 500: OpenApiResponse(response=ErrorOut)},
    )
    @action(detail=False, methods=["delete"], url_path="delete-all-user")
    def delete_all_user(self, request):
        deleted = services.delete_all_users()
        if deleted is None:
            return Response({"detail": "Error occurred while deleting the users."}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        log.info("Deleted %d user documents", deleted)
        return Response({"deleted": deleted})

from drf_spectacular.utils import inline_serializer
from rest_framework import serializers

# Common
ErrorOut = inline_serializer(
    name="ErrorOut",
    fields={"detail": serializers.CharField(help_text="Human readable error message.")},
)

MessageOut = inline_serializer(
    name="MessageOut",
    fields={"message": serializers.CharField(help_text="Human readable confirmation.")},
)

# Users
DeletedOut = inline_serializer(
    name="DeletedOut",
    fields={"deleted": serializers.IntegerField(help_text="Number of documents removed from the collection")},
)

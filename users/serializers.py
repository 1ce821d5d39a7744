from rest_framework import serializers


class UserDocumentSerializer(serializers.Serializer):
    # stored as sent; a trimmed key would no longer match the caller's key
    key = serializers.CharField(max_length=256, trim_whitespace=False, help_text="Document id in the user collection")
    name = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    email = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    phone = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    address = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)


class CreateIndexIn(serializers.Serializer):
    indexName = serializers.CharField(max_length=255)

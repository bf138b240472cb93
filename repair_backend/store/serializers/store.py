# store/serializers/store.py

from rest_framework import serializers

from store.models import Store


class StoreSerializer(serializers.ModelSerializer):
    """
    Branch store. The password hash never leaves the server.
    """

    class Meta:
        model = Store
        fields = [
            "id",
            "name",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class StoreCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    password = serializers.CharField(min_length=4, max_length=128, write_only=True)


class StoreRenameSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)


class StoreAuthenticateSerializer(serializers.Serializer):
    password = serializers.CharField(max_length=128, write_only=True)

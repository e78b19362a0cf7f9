from rest_framework import serializers


class AuditQuerySerializer(serializers.Serializer):
    action = serializers.CharField(max_length=64, required=False)
    objectType = serializers.CharField(max_length=64, required=False)
    objectId = serializers.IntegerField(min_value=1, required=False)
    limit = serializers.IntegerField(min_value=1, max_value=500, required=False)

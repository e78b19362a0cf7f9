from rest_framework import serializers

class ChatSendSerializer(serializers.Serializer):
    consultationId = serializers.IntegerField(min_value=1)
    content = serializers.CharField(max_length=2000, required=False, allow_blank=True)

class ChatHistoryQuerySerializer(serializers.Serializer):
    consultationId = serializers.IntegerField(min_value=1)
    page = serializers.IntegerField(min_value=1, required=False)
    pageSize = serializers.IntegerField(min_value=1, required=False)

class ChatReadSerializer(serializers.Serializer):
    consultationId = serializers.IntegerField(min_value=1)
    upToMessageId = serializers.IntegerField(min_value=1, required=False)

from rest_framework import serializers


class ProviderSerializer(serializers.Serializer):
    key = serializers.CharField()
    name = serializers.CharField()
    icon = serializers.CharField()
    sandboxed = serializers.BooleanField(source="is_sandboxed")
    has_ads = serializers.BooleanField()
    ad_blocking = serializers.CharField()
    is_default = serializers.SerializerMethodField()

    def get_is_default(self, descriptor):
        return descriptor.key == self.context.get("default")

from rest_framework import serializers


class CustomerStatsSerializer(serializers.Serializer):
    total_customers = serializers.IntegerField()
    active_customers = serializers.IntegerField()
    prospects = serializers.IntegerField()


class DealStatsSerializer(serializers.Serializer):
    total_deals = serializers.IntegerField()
    open_deals = serializers.IntegerField()
    total_value = serializers.DecimalField(max_digits=20, decimal_places=2)
    avg_probability = serializers.FloatField(allow_null=True)
    won_deals = serializers.IntegerField()
    won_value = serializers.DecimalField(max_digits=20, decimal_places=2)


class SalesStatsSerializer(serializers.Serializer):
    month_total = serializers.DecimalField(max_digits=20, decimal_places=2)
    month_count = serializers.IntegerField()


class TaskStatsSerializer(serializers.Serializer):
    pending = serializers.IntegerField()
    in_progress = serializers.IntegerField()
    completed = serializers.IntegerField()


class TrendPointSerializer(serializers.Serializer):
    month = serializers.CharField()
    revenue = serializers.DecimalField(max_digits=20, decimal_places=2)
    deals_count = serializers.IntegerField()


class PipelineStageSerializer(serializers.Serializer):
    stage_code = serializers.CharField()
    stage_name = serializers.CharField()
    deals_count = serializers.IntegerField()
    total_value = serializers.DecimalField(max_digits=20, decimal_places=2)


class DashboardStatsSerializer(serializers.Serializer):
    # Top tiles
    customers = CustomerStatsSerializer()
    deals = DealStatsSerializer()
    sales = SalesStatsSerializer()
    tasks = TaskStatsSerializer()
    reports_today = serializers.IntegerField()
    unread_messages = serializers.IntegerField()
    # Charts
    salesTrend = TrendPointSerializer(many=True)
    pipelineOverview = PipelineStageSerializer(many=True)
    period = serializers.CharField()

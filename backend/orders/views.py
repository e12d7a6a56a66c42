from rest_framework import status, views
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import Caller

from .serializers import ParcelSerializer, ParcelStatusUpdateSerializer
from .services import get_order_status_summary, list_parcels, update_parcel_status


class OrderStatusSummaryView(views.APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, id):
        summary = get_order_status_summary(id, Caller.from_user(request.user))
        return Response(summary, status=status.HTTP_200_OK)


class ParcelListView(views.APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        result = list_parcels(Caller.from_user(request.user), request.query_params)
        result["rows"] = ParcelSerializer(result["rows"], many=True).data
        return Response(result, status=status.HTTP_200_OK)


class ParcelStatusView(views.APIView):
    permission_classes = [IsAuthenticated]

    def patch(self, request, hbl):
        ser = ParcelStatusUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        parcel = update_parcel_status(
            hbl,
            ser.validated_data["status"],
            ser.validated_data["notes"],
            user=request.user,
            caller=Caller.from_user(request.user),
        )
        return Response(ParcelSerializer(parcel).data, status=status.HTTP_200_OK)

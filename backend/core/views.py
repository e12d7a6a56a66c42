from rest_framework import status, views
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import Caller, Capability, HasCapability
from accounts.serializers import UserSerializer
from accounts.services import create_carrier_user

from .serializers import CarrierSerializer, CarrierUserCreateSerializer
from .services import create_carrier, delete_carrier, list_carriers


class CarrierListCreateView(views.APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        rows = list_carriers(Caller.from_user(request.user))
        return Response(CarrierSerializer(rows, many=True).data, status=status.HTTP_200_OK)

    def post(self, request):
        ser = CarrierSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        carrier = create_carrier(
            Caller.from_user(request.user),
            ser.validated_data["name"],
            ser.validated_data.get("is_active", True),
        )
        return Response(CarrierSerializer(carrier).data, status=status.HTTP_201_CREATED)


class CarrierDetailView(views.APIView):
    permission_classes = [HasCapability]
    required_capability = Capability.CARRIER_DELETE

    def delete(self, request, id):
        delete_carrier(Caller.from_user(request.user), id)
        return Response({"message": "Carrier deleted successfully"}, status=status.HTTP_200_OK)


class CarrierUserCreateView(views.APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, id):
        ser = CarrierUserCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        user = create_carrier_user(Caller.from_user(request.user), id, **ser.validated_data)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

from django.shortcuts import get_object_or_404
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from ..models import ServiceAssignment
from ..permissions import IsAdminRole
from ..serializers.billing import ServiceAssignmentCreateSerializer
from ..services import assignments


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def create_service_assignment(request):
    s = ServiceAssignmentCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = s.validated_data
    sa = assignments.create_service_assignment(
        appointment_id=data['appointmentId'],
        service_type_ids=data['serviceTypeIds'],
        discount=data['discount'],
        paying_amount=data['payingAmount'],
        tax_category=data.get('taxCategory'),
        user=request.user,
    )
    return Response({
        'ok': True,
        'message': 'Service assignment created successfully',
        'assignmentId': sa.id,
        'data': assignments.format_assignment(sa),
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def assignments_by_appointment(request, appointment_id: int):
    return Response({'ok': True, 'data': assignments.list_by_appointment(appointment_id)})


@api_view(['DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def delete_service_assignment(request, pk: int):
    sa = get_object_or_404(ServiceAssignment, pk=pk)
    assignments.delete_service_assignment(sa, user=request.user)
    return Response(status=status.HTTP_204_NO_CONTENT)

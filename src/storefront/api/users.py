"""Profile, address book and account statistics for the signed-in user."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.dependencies import current_user, current_user_id
from storefront.api.schemas import (
    AddressRequest,
    AddressResponse,
    IdResponse,
    ProfileResponse,
    StatusResponse,
    UpdateAddressRequest,
    UpdateProfileRequest,
    UserStatsResponse,
)
from storefront.identity.user.addresses import AddAddress, RemoveAddress, SetDefaultAddress, UpdateAddress
from storefront.identity.user.profile import UpdateProfile
from storefront.identity.user.user import User
from storefront.ordering.order.order import Order
from storefront.ordering.order.tracking import order_statistics

router = APIRouter(prefix="/api/users", tags=["users"])


def _address_response(address) -> AddressResponse:
    return AddressResponse(
        id=str(address.id),
        first_name=address.first_name,
        last_name=address.last_name,
        street=address.street,
        city=address.city,
        zip_code=address.zip_code,
        country=address.country,
        phone=address.phone,
        is_default=address.is_default,
        formatted=address.formatted,
    )


def _profile_response(user) -> ProfileResponse:
    return ProfileResponse(
        id=str(user.id),
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        is_verified=user.is_verified,
        is_admin=user.is_admin,
        addresses=[_address_response(a) for a in user.addresses],
    )


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(user: User = Depends(current_user)) -> ProfileResponse:
    return _profile_response(user)


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(body: UpdateProfileRequest, user_id: str = Depends(current_user_id)) -> ProfileResponse:
    command = UpdateProfile(
        user_id=user_id,
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
    )
    current_domain.process(command, asynchronous=False)
    return _profile_response(current_domain.repository_for(User).get(user_id))


@router.get("/stats", response_model=UserStatsResponse)
async def user_stats(user: User = Depends(current_user)) -> UserStatsResponse:
    stats = order_statistics(current_domain.repository_for(Order).for_user(str(user.id)))
    return UserStatsResponse(
        total_orders=stats["total_orders"],
        completed_orders=stats["completed_orders"],
        total_spent=stats["total_spent"],
        total_addresses=len(user.addresses),
        member_since=user.created_at,
        is_verified=user.is_verified,
    )


@router.get("/addresses", response_model=list[AddressResponse])
async def list_addresses(user: User = Depends(current_user)) -> list[AddressResponse]:
    addresses = sorted(user.addresses, key=lambda a: not a.is_default)
    return [_address_response(a) for a in addresses]


@router.post("/addresses", status_code=201, response_model=IdResponse)
async def add_address(body: AddressRequest, user_id: str = Depends(current_user_id)) -> IdResponse:
    command = AddAddress(
        user_id=user_id,
        first_name=body.first_name,
        last_name=body.last_name,
        street=body.street,
        city=body.city,
        zip_code=body.zip_code,
        country=body.country,
        phone=body.phone,
        is_default=body.is_default,
    )
    address_id = current_domain.process(command, asynchronous=False)
    return IdResponse(id=address_id)


@router.get("/addresses/{address_id}", response_model=AddressResponse)
async def get_address(address_id: str, user: User = Depends(current_user)) -> AddressResponse:
    return _address_response(user.find_address(address_id))


@router.put("/addresses/{address_id}", response_model=StatusResponse)
async def update_address(
    address_id: str, body: UpdateAddressRequest, user_id: str = Depends(current_user_id)
) -> StatusResponse:
    command = UpdateAddress(
        user_id=user_id,
        address_id=address_id,
        first_name=body.first_name,
        last_name=body.last_name,
        street=body.street,
        city=body.city,
        zip_code=body.zip_code,
        country=body.country,
        phone=body.phone,
        is_default=body.is_default,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@router.delete("/addresses/{address_id}", response_model=StatusResponse)
async def remove_address(address_id: str, user_id: str = Depends(current_user_id)) -> StatusResponse:
    current_domain.process(RemoveAddress(user_id=user_id, address_id=address_id), asynchronous=False)
    return StatusResponse(message="Address removed")


@router.post("/addresses/{address_id}/default", response_model=StatusResponse)
async def set_default_address(address_id: str, user_id: str = Depends(current_user_id)) -> StatusResponse:
    current_domain.process(SetDefaultAddress(user_id=user_id, address_id=address_id), asynchronous=False)
    return StatusResponse(message="Default address updated")

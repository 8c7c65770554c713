"""FastAPI endpoints for authentication and user accounts."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.account.authentication import authenticate
from marketplace.account.profile import DeleteUser, UpdateProfile
from marketplace.account.registration import RegisterUser, VerifyEmail
from marketplace.account.seller import ApplyAsSeller, ApproveSeller
from marketplace.account.user import User
from marketplace.api.schemas import (
    ApproveSellerResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    SellerApplicationRequest,
    SellerApplicationResponse,
    UpdateProfileRequest,
    UserResponse,
    UserSummary,
)
from marketplace.api.security import actor_fields, current_actor
from marketplace.auth.actor import Actor
from marketplace.auth.policy import Capability, require

auth_router = APIRouter(prefix="/auth", tags=["auth"])
user_router = APIRouter(prefix="/users", tags=["users"])


def user_response(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        email=user.email,
        name=user.name,
        role=user.role,
        is_verified=user.is_verified,
        created_at=user.created_at,
    )


# --- Auth endpoints ---


@auth_router.post("/register", status_code=201, response_model=RegisterResponse)
async def register(body: RegisterRequest) -> RegisterResponse:
    command = RegisterUser(
        email=body.email,
        password=body.password,
        name=body.name,
        role=body.role,
    )
    result = current_domain.process(command, asynchronous=False)
    return RegisterResponse(**result)


@auth_router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest) -> LoginResponse:
    result = authenticate(body.email, body.password)
    return LoginResponse(access_token=result["access_token"], user=UserSummary(**result["user"]))


@auth_router.get("/verify-email/{token}", response_model=MessageResponse)
async def verify_email(token: str) -> MessageResponse:
    result = current_domain.process(VerifyEmail(token=token), asynchronous=False)
    return MessageResponse(**result)


@auth_router.post("/apply-seller", response_model=SellerApplicationResponse)
async def apply_seller(body: SellerApplicationRequest) -> SellerApplicationResponse:
    command = ApplyAsSeller(
        email=body.email,
        store_name=body.store_name,
        store_description=body.store_description,
    )
    result = current_domain.process(command, asynchronous=False)
    return SellerApplicationResponse(**result)


@auth_router.post("/approve-seller/{email}", response_model=ApproveSellerResponse)
async def approve_seller(email: str, actor: Actor = Depends(current_actor)) -> ApproveSellerResponse:
    command = ApproveSeller(email=email, **actor_fields(actor))
    result = current_domain.process(command, asynchronous=False)
    return ApproveSellerResponse(**result)


# --- User endpoints ---


@user_router.get("", response_model=list[UserResponse])
async def list_users(actor: Actor = Depends(current_actor)) -> list[UserResponse]:
    require(actor, Capability.MANAGE_USERS)
    return [user_response(user) for user in current_domain.repository_for(User).list_all()]


@user_router.get("/profile", response_model=UserResponse)
async def get_profile(actor: Actor = Depends(current_actor)) -> UserResponse:
    return user_response(current_domain.repository_for(User).get(actor.user_id))


@user_router.put("/profile", response_model=UserSummary)
async def update_profile(body: UpdateProfileRequest, actor: Actor = Depends(current_actor)) -> UserSummary:
    command = UpdateProfile(user_id=actor.user_id, name=body.name, email=body.email)
    result = current_domain.process(command, asynchronous=False)
    return UserSummary(**result)


@user_router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, actor: Actor = Depends(current_actor)) -> UserResponse:
    require(actor, Capability.MANAGE_USERS)
    return user_response(current_domain.repository_for(User).get(user_id))


@user_router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: str, actor: Actor = Depends(current_actor)) -> MessageResponse:
    current_domain.process(DeleteUser(user_id=user_id, **actor_fields(actor)), asynchronous=False)
    return MessageResponse(message="User deleted successfully")

from typing import Annotated, Callable

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from spectrum_accounts.application import accounts
from spectrum_accounts.application.issue_code import issue_code
from spectrum_accounts.application.register_user import register_user
from spectrum_accounts.application.verify_code import verify_code
from spectrum_accounts.domain.entities import Subject
from spectrum_accounts.domain.errors import (
    CodeNotFound,
    InvalidCode,
    StorageFailure,
    Unauthorized,
    UserAlreadyExists,
    UserNotFound,
    ValidationFailure,
)
from spectrum_accounts.domain.ports.notifier import NotifierPort
from spectrum_accounts.domain.ports.unit_of_work import UnitOfWorkPort
from spectrum_accounts.domain.ports.verification_cache import VerificationCachePort
from spectrum_accounts.infrastructure.redis_cache.sessions import RedisSessions
from spectrum_accounts.presentation.dependencies import (
    get_code_ttl_seconds,
    get_current_subject,
    get_hash_password,
    get_list_page_size,
    get_notifier,
    get_sessions,
    get_uow,
    get_verification_cache,
    get_verify_password,
)
from spectrum_accounts.schemas.requests import (
    CodeVerifyIn,
    UserCreateIn,
    UserIdIn,
    UserPasswordIn,
    UserUpdateIn,
)
from spectrum_accounts.schemas.responses import (
    CodeSentOut,
    Envelope,
    TokenOut,
    UserOut,
)

router = APIRouter(prefix="/users", tags=["Users"])
basic_scheme = HTTPBasic()

USER_NOT_FOUND = "The requested user with the specified email does not exist."


def _unauthorized(e: Unauthorized) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED, detail=f"Unauthorized: {e}"
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[UserOut],
)
async def post_create_user(
    body: UserCreateIn,
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
    hash_password: Annotated[Callable[..., str], Depends(get_hash_password)],
):
    try:
        user = await register_user(
            uow,
            firstname=body.firstname,
            lastname=body.lastname,
            email=body.email,
            phone=body.phone,
            address=body.address,
            password=body.password,
            hash_password=hash_password,
        )
    except ValidationFailure as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except UserAlreadyExists:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="email already registered"
        )
    return Envelope[UserOut](
        statusCode=status.HTTP_201_CREATED,
        message="user created successfully",
        data=UserOut.from_user(user),
    )


@router.post("/login", response_model=TokenOut)
async def post_login(
    creds: Annotated[HTTPBasicCredentials, Depends(basic_scheme)],
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
    verify_password: Annotated[Callable[[str, str], bool], Depends(get_verify_password)],
    sessions: Annotated[RedisSessions, Depends(get_sessions)],
):
    email = creds.username.strip().lower()

    async with uow as transaction:
        user_and_hash = await transaction.db_users.get_by_email_with_hash(email)
    if not user_and_hash or not verify_password(creds.password, user_and_hash[1]):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid credentials"
        )
    user = user_and_hash[0]
    token = await sessions.create(Subject(user_id=user.id, role=user.role))
    return TokenOut(token=token)


@router.get("/allUsers", response_model=Envelope[list[UserOut]])
async def get_all_users(
    subject: Annotated[Subject, Depends(get_current_subject)],
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
    page_size: Annotated[int, Depends(get_list_page_size)],
):
    try:
        users = await accounts.list_users(uow, subject, limit=page_size)
    except Unauthorized as e:
        raise _unauthorized(e)
    return Envelope[list[UserOut]](
        message="all users fetched successfully",
        data=[UserOut.from_user(u) for u in users],
    )


@router.put(
    "/update",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=Envelope[UserOut],
)
async def put_update_user(
    body: UserUpdateIn,
    subject: Annotated[Subject, Depends(get_current_subject)],
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
):
    try:
        user = await accounts.update_profile(
            uow,
            subject,
            user_id=body.id,
            email=body.email,
            phone=body.phone,
            address=body.address,
        )
    except Unauthorized as e:
        raise _unauthorized(e)
    except UserNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="user not found")
    except UserAlreadyExists:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="email already registered"
        )
    return Envelope[UserOut](
        statusCode=status.HTTP_202_ACCEPTED,
        message="user updated successfully",
        data=UserOut.from_user(user),
    )


@router.put(
    "/update/password",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=Envelope[UserOut],
)
async def put_update_password(
    body: UserPasswordIn,
    subject: Annotated[Subject, Depends(get_current_subject)],
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
    hash_password: Annotated[Callable[..., str], Depends(get_hash_password)],
):
    try:
        user = await accounts.update_password(
            uow,
            subject,
            user_id=body.id,
            password=body.password,
            hash_password=hash_password,
        )
    except ValidationFailure as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Unauthorized as e:
        raise _unauthorized(e)
    except UserNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="user not found")
    return Envelope[UserOut](
        statusCode=status.HTTP_202_ACCEPTED,
        message="password updated successfully",
        data=UserOut.from_user(user),
    )


@router.delete("/deactivate", status_code=status.HTTP_202_ACCEPTED)
async def delete_deactivate_user(
    subject: Annotated[Subject, Depends(get_current_subject)],
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
    body: UserIdIn = Body(...),
):
    try:
        await accounts.deactivate_user(uow, subject, body.id)
    except Unauthorized as e:
        raise _unauthorized(e)
    except UserNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="user not found")
    return {"status": "success", "message": "user deactivated successfully"}


@router.get("/profile", response_model=Envelope[UserOut])
async def get_profile(
    subject: Annotated[Subject, Depends(get_current_subject)],
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
):
    try:
        user = await accounts.get_profile(uow, subject)
    except UserNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unauthorized")
    return Envelope[UserOut](
        message="user fetched successfully", data=UserOut.from_user(user)
    )


@router.get("/get_email", response_model=Envelope[UserOut])
async def get_user_email(
    subject: Annotated[Subject, Depends(get_current_subject)],
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
    email: Annotated[str, Query()] = "",
):
    try:
        user = await accounts.get_user_by_email(uow, email)
    except ValidationFailure as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except UserNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND)
    return Envelope[UserOut](
        message="user retrieved successfully", data=UserOut.from_user(user)
    )


@router.get("/send_code_to_user", response_model=CodeSentOut)
async def get_send_code_to_user(
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
    cache: Annotated[VerificationCachePort, Depends(get_verification_cache)],
    notifier: Annotated[NotifierPort, Depends(get_notifier)],
    code_ttl_seconds: Annotated[int, Depends(get_code_ttl_seconds)],
    email: Annotated[str, Query()] = "",
):
    try:
        outcome = await issue_code(
            uow=uow,
            cache=cache,
            notifier=notifier,
            email=email,
            code_ttl_seconds=code_ttl_seconds,
        )
    except ValidationFailure as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except UserNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND)
    except StorageFailure:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="could not store verification code",
        )
    return CodeSentOut.from_outcome(outcome)


@router.post("/verify_code")
async def post_verify_code(
    body: CodeVerifyIn,
    cache: Annotated[VerificationCachePort, Depends(get_verification_cache)],
):
    try:
        await verify_code(cache, body.user_id, body.code)
    except CodeNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Key does not exist"
        )
    except InvalidCode:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid verification code",
        )
    except StorageFailure:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="could not read verification code",
        )
    return {
        "status": "success",
        "statusCode": status.HTTP_200_OK,
        "message": "code verification successful",
    }

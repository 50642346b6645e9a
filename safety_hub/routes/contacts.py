"""
Trusted contact endpoints.
"""

from fastapi import APIRouter, Depends

from safety_hub.models.base import Notification
from safety_hub.models.dashboard import ContactCreate, ContactsResponse
from safety_hub.routes.deps import require_identity
from safety_hub.services.contacts_service import TrustedContactList, get_contact_list

router = APIRouter(prefix="/contacts", tags=["Trusted Contacts"], dependencies=[Depends(require_identity)])


@router.get("", response_model=ContactsResponse)
async def list_contacts(contacts: TrustedContactList = Depends(get_contact_list)):
    return ContactsResponse(contacts=contacts.contacts)


@router.post("", response_model=ContactsResponse)
async def add_contact(request: ContactCreate, contacts: TrustedContactList = Depends(get_contact_list)):
    updated = contacts.add(request.contact)
    return ContactsResponse(
        notification=Notification.success("Trusted contact added successfully."),
        contacts=updated,
    )


@router.delete("/{index}", response_model=ContactsResponse)
async def remove_contact(index: int, contacts: TrustedContactList = Depends(get_contact_list)):
    return ContactsResponse(contacts=contacts.remove(index))

import uuid

from sqlalchemy.orm import Session

from app.db.models.customer import Customer as CustomerModel
from app.errors import NotFoundError


def get_customer_by_id(db: Session, customer_id: uuid.UUID) -> CustomerModel | None:
    """Get a customer by ID."""
    return db.query(CustomerModel).filter(CustomerModel.id == customer_id).first()


def get_all_customers(db: Session) -> list[CustomerModel]:
    """Get all customers, sorted by name."""
    return db.query(CustomerModel).order_by(CustomerModel.name).all()


def create_customer(db: Session, name: str, phone: str) -> CustomerModel:
    """Create a new customer in the database. Pure data access - no business logic."""
    db_customer = CustomerModel(name=name, phone=phone)
    db.add(db_customer)
    db.commit()
    db.refresh(db_customer)
    return db_customer


def update_customer(
    db: Session,
    customer_id: uuid.UUID,
    name: str | None = None,
    phone: str | None = None,
) -> CustomerModel:
    """Update customer fields. Only provided fields will be updated.

    Rentals already opened keep the snapshot taken at the time.
    """
    customer = get_customer_by_id(db, customer_id)
    if not customer:
        raise NotFoundError("Customer not found")

    if name is not None:
        customer.name = name
    if phone is not None:
        customer.phone = phone

    db.commit()
    db.refresh(customer)
    return customer

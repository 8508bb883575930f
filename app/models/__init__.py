from app.models.country import Country
from app.models.city import City
from app.models.address import Address
from app.models.customer import Customer
from app.models.staff import Staff
from app.models.payment import Payment

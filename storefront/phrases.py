"""Static localization tables for order summaries and notification emails.

Pure data, loaded once at import time. Lookups fall back to English.
"""

from __future__ import annotations

CURRENCY_SYMBOLS = {
    'USD': '$',
    'EUR': '€',
    'ALL': 'L',
    'GBP': '£',
    'BBD': 'Bds$',
    'BHD': 'BD',
}

COUNTRY_NAMES = {
    'AL': {'en': 'Albania', 'sq': 'Shqipëri'},
    'XK': {'en': 'Kosovo', 'sq': 'Kosovë'},
    'MK': {'en': 'North Macedonia', 'sq': 'Maqedonia e Veriut'},
}

LANGUAGE_ALIASES = {'al': 'sq', 'gr': 'el'}


def normalize_language(language: str | None) -> str:
    lang = (language or 'en').strip().lower()
    return LANGUAGE_ALIASES.get(lang, lang)


def currency_symbol(currency: str | None) -> str:
    return CURRENCY_SYMBOLS.get((currency or '').upper(), '$')


def country_name(country_code: str | None, language: str | None) -> str:
    if not country_code:
        return ''
    names = COUNTRY_NAMES.get(country_code.upper())
    if not names:
        return country_code
    return names.get(normalize_language(language)) or names['en']


def _terms(
    *,
    order: str,
    subtotal: str,
    delivery: str,
    total: str,
    customer: str,
    phone: str,
    delivery_address: str,
    pickup_location: str,
    delivery_time: str,
    pickup_time: str,
    arrival_time: str,
    payment: str,
    notes: str,
    asap: str,
    order_type: str,
    delivery_type: str,
    pickup_type: str,
    dine_in_type: str,
    discount: str,
    location: str,
    distance: str,
) -> dict[str, str]:
    return {
        'order': order,
        'subtotal': subtotal,
        'delivery': delivery,
        'total': total,
        'customer': customer,
        'phone': phone,
        'deliveryAddress': delivery_address,
        'pickupLocation': pickup_location,
        'deliveryTime': delivery_time,
        'pickupTime': pickup_time,
        'arrivalTime': arrival_time,
        'payment': payment,
        'notes': notes,
        'asap': asap,
        'orderType': order_type,
        'delivery_type': delivery_type,
        'pickup_type': pickup_type,
        'dineIn_type': dine_in_type,
        'discount': discount,
        'location': location,
        'distance': distance,
    }


_EN_BASE = dict(
    order='Order',
    subtotal='Subtotal',
    total='Total',
    customer='Customer',
    phone='Phone',
    payment='Payment',
    notes='Notes',
    asap='ASAP',
    discount='Discount',
    location='Location',
    distance='Distance',
)

_SQ_BASE = dict(
    order='Porosia',
    subtotal='Nëntotali',
    total='Totali',
    customer='Klienti',
    phone='Telefoni',
    payment='Pagesa',
    notes='Shënime',
    asap='SA MË SHPEJT',
    discount='Zbritje',
    location='Vendndodhja',
    distance='Distanca',
)

MESSAGE_TERMS: dict[str, dict[str, dict[str, str]]] = {
    'en': {
        'RESTAURANT': _terms(
            **_EN_BASE,
            delivery='Delivery',
            delivery_address='Delivery Address',
            pickup_location='Pickup Location',
            delivery_time='Delivery Time',
            pickup_time='Pickup Time',
            arrival_time='Arrival Time',
            order_type='Order Type',
            delivery_type='Delivery',
            pickup_type='Pickup',
            dine_in_type='Dine In',
        ),
        'CAFE': _terms(
            **_EN_BASE,
            delivery='Delivery',
            delivery_address='Delivery Address',
            pickup_location='Pickup Location',
            delivery_time='Delivery Time',
            pickup_time='Pickup Time',
            arrival_time='Arrival Time',
            order_type='Order Type',
            delivery_type='Delivery',
            pickup_type='Pickup',
            dine_in_type='Dine In',
        ),
        'RETAIL': _terms(
            **_EN_BASE,
            delivery='Shipping',
            delivery_address='Shipping Address',
            pickup_location='Pickup Location',
            delivery_time='Shipping Time',
            pickup_time='Pickup Time',
            arrival_time='Visit Time',
            order_type='Order Type',
            delivery_type='Shipping',
            pickup_type='Pickup',
            dine_in_type='Visit',
        ),
        'GROCERY': _terms(
            **_EN_BASE,
            delivery='Delivery',
            delivery_address='Delivery Address',
            pickup_location='Pickup Location',
            delivery_time='Delivery Time',
            pickup_time='Pickup Time',
            arrival_time='Visit Time',
            order_type='Order Type',
            delivery_type='Delivery',
            pickup_type='Pickup',
            dine_in_type='Visit',
        ),
        'JEWELRY': _terms(
            **_EN_BASE,
            delivery='Shipping',
            delivery_address='Shipping Address',
            pickup_location='Store Location',
            delivery_time='Shipping Time',
            pickup_time='Appointment Time',
            arrival_time='Appointment Time',
            order_type='Service Type',
            delivery_type='Shipping',
            pickup_type='Store Visit',
            dine_in_type='Consultation',
        ),
        'FLORIST': _terms(
            **_EN_BASE,
            delivery='Delivery',
            delivery_address='Delivery Address',
            pickup_location='Pickup Location',
            delivery_time='Delivery Time',
            pickup_time='Pickup Time',
            arrival_time='Visit Time',
            order_type='Order Type',
            delivery_type='Delivery',
            pickup_type='Pickup',
            dine_in_type='Visit',
        ),
        'HEALTH_BEAUTY': _terms(
            **_EN_BASE,
            delivery='Delivery',
            delivery_address='Delivery Address',
            pickup_location='Pickup Location',
            delivery_time='Delivery Time',
            pickup_time='Appointment Time',
            arrival_time='Appointment Time',
            order_type='Service Type',
            delivery_type='Delivery',
            pickup_type='Store Visit',
            dine_in_type='Consultation',
        ),
        'OTHER': _terms(
            **_EN_BASE,
            delivery='Delivery',
            delivery_address='Delivery Address',
            pickup_location='Pickup Location',
            delivery_time='Delivery Time',
            pickup_time='Pickup Time',
            arrival_time='Visit Time',
            order_type='Order Type',
            delivery_type='Delivery',
            pickup_type='Pickup',
            dine_in_type='Visit',
        ),
    },
    'sq': {
        'RESTAURANT': _terms(
            **_SQ_BASE,
            delivery='Dorëzimi',
            delivery_address='Adresa e Dorëzimit',
            pickup_location='Vendi i Marrjes',
            delivery_time='Koha e Dorëzimit',
            pickup_time='Koha e Marrjes',
            arrival_time='Koha e Arritjes',
            order_type='Lloji i Porosisë',
            delivery_type='Dorëzim',
            pickup_type='Marrje',
            dine_in_type='Në Lokal',
        ),
        'CAFE': _terms(
            **_SQ_BASE,
            delivery='Dorëzimi',
            delivery_address='Adresa e Dorëzimit',
            pickup_location='Vendi i Marrjes',
            delivery_time='Koha e Dorëzimit',
            pickup_time='Koha e Marrjes',
            arrival_time='Koha e Arritjes',
            order_type='Lloji i Porosisë',
            delivery_type='Dorëzim',
            pickup_type='Marrje',
            dine_in_type='Në Lokal',
        ),
        'RETAIL': _terms(
            **_SQ_BASE,
            delivery='Dërgimi',
            delivery_address='Adresa e Dërgimit',
            pickup_location='Vendi i Marrjes',
            delivery_time='Koha e Dërgimit',
            pickup_time='Koha e Marrjes',
            arrival_time='Koha e Vizitës',
            order_type='Lloji i Porosisë',
            delivery_type='Dërgim',
            pickup_type='Marrje',
            dine_in_type='Vizitë',
        ),
        'GROCERY': _terms(
            **_SQ_BASE,
            delivery='Dorëzimi',
            delivery_address='Adresa e Dorëzimit',
            pickup_location='Vendi i Marrjes',
            delivery_time='Koha e Dorëzimit',
            pickup_time='Koha e Marrjes',
            arrival_time='Koha e Vizitës',
            order_type='Lloji i Porosisë',
            delivery_type='Dorëzim',
            pickup_type='Marrje',
            dine_in_type='Vizitë',
        ),
        'JEWELRY': _terms(
            **_SQ_BASE,
            delivery='Dërgimi',
            delivery_address='Adresa e Dërgimit',
            pickup_location='Vendndodhja e Dyqanit',
            delivery_time='Koha e Dërgimit',
            pickup_time='Koha e Takimit',
            arrival_time='Koha e Takimit',
            order_type='Lloji i Shërbimit',
            delivery_type='Dërgim',
            pickup_type='Vizitë në Dyqan',
            dine_in_type='Konsultim',
        ),
        'FLORIST': _terms(
            **_SQ_BASE,
            delivery='Dorëzimi',
            delivery_address='Adresa e Dorëzimit',
            pickup_location='Vendi i Marrjes',
            delivery_time='Koha e Dorëzimit',
            pickup_time='Koha e Marrjes',
            arrival_time='Koha e Vizitës',
            order_type='Lloji i Porosisë',
            delivery_type='Dorëzim',
            pickup_type='Marrje',
            dine_in_type='Vizitë',
        ),
        'HEALTH_BEAUTY': _terms(
            **_SQ_BASE,
            delivery='Dorëzimi',
            delivery_address='Adresa e Dorëzimit',
            pickup_location='Vendi i Marrjes',
            delivery_time='Koha e Dorëzimit',
            pickup_time='Koha e Takimit',
            arrival_time='Koha e Takimit',
            order_type='Lloji i Shërbimit',
            delivery_type='Dorëzim',
            pickup_type='Vizitë në Dyqan',
            dine_in_type='Konsultim',
        ),
        'OTHER': _terms(
            **_SQ_BASE,
            delivery='Dorëzimi',
            delivery_address='Adresa e Dorëzimit',
            pickup_location='Vendi i Marrjes',
            delivery_time='Koha e Dorëzimit',
            pickup_time='Koha e Marrjes',
            arrival_time='Koha e Vizitës',
            order_type='Lloji i Porosisë',
            delivery_type='Dorëzim',
            pickup_type='Marrje',
            dine_in_type='Vizitë',
        ),
    },
}


def message_terms(language: str | None, business_type: str | None) -> dict[str, str]:
    by_type = MESSAGE_TERMS.get(normalize_language(language))
    if by_type and business_type in by_type:
        return by_type[business_type]
    return MESSAGE_TERMS['en']['RESTAURANT']


def _email_labels(*, salon: bool) -> dict[str, dict[str, str]]:
    def pick(salon_text: str, order_text: str) -> str:
        return salon_text if salon else order_text

    return {
        'en': {
            'newOrderReceived': pick('New Booking Request Received!', 'New Order Received!'),
            'newOrder': pick('New Booking Request', 'New Order'),
            'order': pick('Booking', 'Order'),
            'new': 'New',
            'customerInformation': 'Customer Information',
            'name': 'Name',
            'phone': 'Phone',
            'deliveryAddress': pick('Address', 'Delivery Address'),
            'deliveryMethod': pick('Booking Type', 'Delivery Method'),
            'postalService': 'Postal Service',
            'deliveryTime': pick('Appointment Date & Time', 'Delivery Time'),
            'deliveryFee': pick('Service Fee', 'Delivery Fee'),
            'city': 'City',
            'country': 'Country',
            'postalCode': 'Postal Code',
            'orderItems': pick('Services', 'Order Items'),
            'variant': 'Variant',
            'specialInstructions': 'Special Instructions',
            'viewOrderDetails': pick('View Booking Details', 'View Order Details'),
            'notificationEnabled': pick(
                'This notification was sent because you have booking notifications enabled.',
                'This notification was sent because you have order notifications enabled.',
            ),
            'newOrderSubject': pick('New Booking Request', 'New Order'),
            'thankYou': pick('Thank you for your booking!', 'Thank you for your order!'),
        },
        'sq': {
            'newOrderReceived': pick('Kërkesë për Rezervim e Re e Marrë!', 'Porosi e Re e Marrë!'),
            'newOrder': pick('Kërkesë për Rezervim e Re', 'Porosi e Re'),
            'order': pick('Rezervim', 'Porosi'),
            'new': 'E Re',
            'customerInformation': 'Informacioni i Klientit',
            'name': 'Emri',
            'phone': 'Telefoni',
            'deliveryAddress': pick('Adresa', 'Adresa e Dorëzimit'),
            'deliveryMethod': pick('Lloji i Rezervimit', 'Metoda e Dorëzimit'),
            'postalService': 'Shërbimi Postar',
            'deliveryTime': pick('Data dhe Koha e Takimit', 'Koha e Dorëzimit'),
            'deliveryFee': pick('Tarifa e Shërbimit', 'Tarifa e Dorëzimit'),
            'city': 'Qyteti',
            'country': 'Shteti',
            'postalCode': 'Kodi Postar',
            'orderItems': pick('Shërbimet', 'Artikujt e Porosisë'),
            'variant': 'Varianti',
            'specialInstructions': 'Udhëzime të Veçanta',
            'viewOrderDetails': pick('Shiko Detajet e Rezervimit', 'Shiko Detajet e Porosisë'),
            'notificationEnabled': pick(
                'Kjo njoftim u dërgua sepse keni aktivizuar njoftimet e rezervimeve.',
                'Kjo njoftim u dërgua sepse keni aktivizuar njoftimet e porosive.',
            ),
            'newOrderSubject': pick('Kërkesë për Rezervim e Re', 'Porosi e Re'),
            'thankYou': pick('Faleminderit për rezervimin!', 'Faleminderit për porosinë!'),
        },
        'es': {
            'newOrderReceived': pick('¡Nueva Solicitud de Reserva Recibida!', '¡Nuevo Pedido Recibido!'),
            'newOrder': pick('Nueva Solicitud de Reserva', 'Nuevo Pedido'),
            'order': pick('Reserva', 'Pedido'),
            'new': 'Nuevo',
            'customerInformation': 'Información del Cliente',
            'name': 'Nombre',
            'phone': 'Teléfono',
            'deliveryAddress': pick('Dirección', 'Dirección de Entrega'),
            'deliveryMethod': pick('Tipo de Reserva', 'Método de Entrega'),
            'postalService': 'Servicio Postal',
            'deliveryTime': pick('Fecha y Hora de la Cita', 'Tiempo de Entrega'),
            'deliveryFee': pick('Tarifa del Servicio', 'Tarifa de Entrega'),
            'city': 'Ciudad',
            'country': 'País',
            'postalCode': 'Código Postal',
            'orderItems': pick('Servicios', 'Artículos del Pedido'),
            'variant': 'Variante',
            'specialInstructions': 'Instrucciones Especiales',
            'viewOrderDetails': pick('Ver Detalles de la Reserva', 'Ver Detalles del Pedido'),
            'notificationEnabled': pick(
                'Esta notificación se envió porque tienes las notificaciones de reservas habilitadas.',
                'Esta notificación se envió porque tienes las notificaciones de pedidos habilitadas.',
            ),
            'newOrderSubject': pick('Nueva Solicitud de Reserva', 'Nuevo Pedido'),
            'thankYou': pick('¡Gracias por tu reserva!', '¡Gracias por tu pedido!'),
        },
        'el': {
            'newOrderReceived': pick('Νέο Αίτημα Κράτησης Ελήφθη!', 'Νέα Παραγγελία Ελήφθη!'),
            'newOrder': pick('Νέο Αίτημα Κράτησης', 'Νέα Παραγγελία'),
            'order': pick('Κράτηση', 'Παραγγελία'),
            'new': 'Νέο',
            'customerInformation': 'Στοιχεία Πελάτη',
            'name': 'Όνομα',
            'phone': 'Τηλέφωνο',
            'deliveryAddress': pick('Διεύθυνση', 'Διεύθυνση Παράδοσης'),
            'deliveryMethod': pick('Τύπος Κράτησης', 'Μέθοδος Παράδοσης'),
            'postalService': 'Ταχυδρομική Υπηρεσία',
            'deliveryTime': pick('Ημερομηνία & Ώρα Ραντεβού', 'Χρόνος Παράδοσης'),
            'deliveryFee': pick('Κόστος Υπηρεσίας', 'Έξοδα Αποστολής'),
            'city': 'Πόλη',
            'country': 'Χώρα',
            'postalCode': 'Ταχυδρομικός Κώδικας',
            'orderItems': pick('Υπηρεσίες', 'Προϊόντα Παραγγελίας'),
            'variant': 'Παραλλαγή',
            'specialInstructions': 'Ειδικές Οδηγίες',
            'viewOrderDetails': pick('Δείτε τα Στοιχεία Κράτησης', 'Δείτε τα Στοιχεία Παραγγελίας'),
            'notificationEnabled': pick(
                'Αυτή η ειδοποίηση στάλθηκε επειδή έχετε ενεργοποιήσει τις ειδοποιήσεις κρατήσεων.',
                'Αυτή η ειδοποίηση στάλθηκε επειδή έχετε ενεργοποιήσει τις ειδοποιήσεις παραγγελιών.',
            ),
            'newOrderSubject': pick('Νέο Αίτημα Κράτησης', 'Νέα Παραγγελία'),
            'thankYou': pick('Ευχαριστούμε για την κράτησή σας!', 'Ευχαριστούμε για την παραγγελία σας!'),
        },
    }


EMAIL_LABELS = {False: _email_labels(salon=False), True: _email_labels(salon=True)}


def email_labels(language: str | None, business_type: str | None) -> dict[str, str]:
    by_language = EMAIL_LABELS[business_type in ('SALON', 'SERVICES')]
    return by_language.get(normalize_language(language), by_language['en'])

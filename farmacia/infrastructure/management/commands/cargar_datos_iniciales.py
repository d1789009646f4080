from django.core.management.base import BaseCommand

from farmacia.catalog.models import Producto

PRODUCTOS_DEMO = [
    ('Paracetamol 500mg', 1990, 35),
    ('Ibuprofeno 400mg', 2990, 22),
    ('Amoxicilina 500mg', 4990, 5),
]


class Command(BaseCommand):
    help = 'Carga los productos de demo en el catálogo'

    def add_arguments(self, parser):
        parser.add_argument(
            '--descuento', type=int, default=0,
            help='Descuento (%%) inicial para los productos creados',
        )

    def handle(self, *args, **options):
        self.stdout.write('Creando datos iniciales...')

        for nombre, precio, stock in PRODUCTOS_DEMO:
            producto, created = Producto.objects.get_or_create(
                nombre=nombre,
                defaults={
                    'precio': precio,
                    'stock': stock,
                    'descuento': options['descuento'],
                }
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f'Creado producto "{producto.nombre}"'))
            else:
                self.stdout.write(f'Producto "{producto.nombre}" ya existía')

        self.stdout.write(self.style.SUCCESS('Datos iniciales cargados con éxito!'))

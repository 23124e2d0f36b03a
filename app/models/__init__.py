from .cliente import Cliente, Logradouro

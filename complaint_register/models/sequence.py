from sqlmodel import Field, SQLModel


class SerialSequence(SQLModel, table=True):
    __tablename__ = "serial_sequences"

    name: str = Field(primary_key=True, max_length=50)
    current_value: int = Field(default=0, nullable=False)
